from flask import g
from flask_restx import Resource, Namespace

from jsonstore.utils.envelope import send_response
from jsonstore.utils.errors import StorageUnavailableError

ns = Namespace("health", description="Health Check")

@ns.route("/")
@ns.route("")
class Health(Resource):
    def get(self):
        """Health check endpoint"""
        return send_response(True, {"status": "ok"}, "Service is up", 200)

@ns.route("/storage")
@ns.route("/storage/")
class HealthStorage(Resource):
    def get(self):
        """Health check for the storage root."""
        try:
            writable = g.storage.ping()
        except OSError as e:
            raise StorageUnavailableError(f"Storage root is not reachable: {e}") from e
        if not writable:
            raise StorageUnavailableError("Storage root is not writable")
        return send_response(True, {"status": "ok", "storageRoot": str(g.storage.base_dir)}, "Storage is writable", 200)
