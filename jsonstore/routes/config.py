from flask import g, request
from flask_restx import Namespace, Resource

from jsonstore.utils.envelope import send_response
from jsonstore.utils.errors import InvalidPayloadError

ns = Namespace("config", description="Per-tenant presentation config", path="/")

@ns.route("/config")
class TenantConfig(Resource):
    def get(self):
        """Return the tenant config, creating the default one on first access."""
        config, created = g.configs.get(g.tenant)
        data = {"host": g.tenant, "config": config}
        if created:
            data["created"] = True
        return send_response(True, data, "Configuration loaded", 200)

    def post(self):
        """Replace the tenant config. An empty body restores the default template."""
        body = None
        if request.get_data(cache=True).strip():
            body = request.get_json(silent=True, force=True)
            if body is None:
                raise InvalidPayloadError("Invalid config format")

        config = g.configs.put(g.tenant, body)
        return send_response(True, {"host": g.tenant, "config": config}, "Config saved successfully", 200)
