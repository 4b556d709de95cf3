from flask import g, request
from flask_restx import Namespace, Resource

from jsonstore.utils.envelope import send_response
from jsonstore.utils.errors import InvalidPayloadError

ns = Namespace("files", description="Tenant-scoped JSON documents", path="/")

def _json_body(required: bool = True) -> dict:
    if not request.get_data(cache=True).strip() and not required:
        return {}
    body = request.get_json(silent=True, force=True)
    if not isinstance(body, dict):
        raise InvalidPayloadError("Invalid JSON format")
    return body

@ns.route("/save-json")
class SaveJson(Resource):
    def post(self):
        """Store a new JSON document under a generated id."""
        body = _json_body()
        display_name = body.get("displayName")
        if display_name is None:
            display_name = body.get("filename")

        record = g.documents.save(g.tenant, body.get("data"), display_name)
        return send_response(True, record.to_dict(), f"JSON saved successfully for host {g.tenant}", 200)

@ns.route("/files")
class FileList(Resource):
    def get(self):
        """List the tenant's documents, newest first."""
        records = g.documents.list(g.tenant)
        return send_response(True, [r.to_dict() for r in records], f"Files retrieved successfully for host {g.tenant}", 200)

@ns.route("/file/<string:doc_id>")
class FileItem(Resource):
    def get(self, doc_id: str):
        record, data = g.documents.get(g.tenant, doc_id)
        return send_response(True, {"meta": record.to_dict(), "data": data}, f"File retrieved for host {g.tenant}", 200)

    def put(self, doc_id: str):
        """Replace the payload and/or rename; both fields optional."""
        body = _json_body(required=False)
        record = g.documents.update(g.tenant, doc_id, body.get("data"), body.get("newDisplayName"))
        return send_response(True, record.to_dict(), f"File updated successfully for host {g.tenant}", 200)

    def delete(self, doc_id: str):
        deleted = g.documents.delete(g.tenant, doc_id)
        return send_response(True, {"id": deleted}, f"File deleted successfully for host {g.tenant}", 200)
