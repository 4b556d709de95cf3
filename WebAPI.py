import time
import uuid
from typing import Optional

from flask import Flask, request, g
from flask_restx import Api

from werkzeug.exceptions import NotFound, HTTPException, RequestEntityTooLarge

from jsonstore.configs import AppConfig, load_config
from jsonstore.Logger.log_main import get_logger
from jsonstore.providers.StorageProvider.local_provider import LocalStorageProvider
from jsonstore.utils.config_store import ConfigStore
from jsonstore.utils.document_store import DocumentStore
from jsonstore.utils.envelope import bytes_to_mb, send_response
from jsonstore.utils.errors import AppError
from jsonstore.utils.route_loader import load_routes
from jsonstore.utils.tenant import resolve_tenant
from jsonstore.utils.tenant_locks import TenantLocks

# configure logger once per process, duplicate handlers
logger = get_logger()

# app factory
def create_app(cfg: Optional[AppConfig] = None, storage=None) -> Flask:
    app = Flask(__name__)
    cfg = cfg or load_config()
    storage = storage or LocalStorageProvider(cfg.storage_root)

    # HARD Request Payload Size Limit
    app.config["MAX_CONTENT_LENGTH"] = cfg.max_request_bytes
    app.config["RESTX_ERROR_404_HELP"] = False

    # shared by both stores
    locks = TenantLocks(enabled=cfg.serialize_tenant_writes)
    documents = DocumentStore(
        storage,
        enforce_unique_display_name=cfg.enforce_unique_display_name,
        require_display_name=cfg.require_display_name,
        duplicate_name_status=cfg.duplicate_name_status,
        locks=locks,
    )
    configs = ConfigStore(storage, default_template_path=cfg.default_config_path, locks=locks)

    api = Api(app, version="1.0", title="Host JSON Store API", doc="/docs", errors={}, catch_all_404s=True)

    load_routes(api, "jsonstore.routes")

    @app.before_request
    def before_request():
        g.request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        g.start_time = time.time()
        g.cfg = cfg  # request-scoped config handle
        g.storage = storage
        g.documents = documents
        g.configs = configs

        # Tenant: override header, then Origin, then Host
        g.tenant = resolve_tenant(
            request.headers,
            override_header=cfg.tenant_override_header,
            include_port=cfg.tenant_key_includes_port,
        )

    @app.after_request
    def after_request(resp):
        latency_ms = int((time.time() - g.start_time) * 1000)
        resp.headers["X-Request-ID"] = g.request_id
        logger.info("request_complete", extra={
            "request_id": g.request_id,
            "tenant": getattr(g, "tenant", None),
            "method": request.method,
            "path": request.path,
            "status_code": resp.status_code,
            "latency_ms": latency_ms,
        })

        return resp

    @api.errorhandler(NotFound)
    def handle_not_found(err: NotFound):
        logger.info(
            "not_found",
            extra={"request_id": getattr(g, "request_id", None),
                   "path": getattr(request, "path", None),
                   "method": getattr(request, "method", None),
                   "status_code": 404
                   },
        )
        return send_response(False, None, "The requested resource was not found.", 404)

    @api.errorhandler(Exception)
    def handle_all_errors(err):
        # AppError and its subclasses carry their own status
        if isinstance(err, AppError):
            log = logger.error if err.http_status >= 500 else logger.info
            log(err.message, extra={
                "request_id": getattr(g, "request_id", None),
                "tenant": getattr(g, "tenant", None),
                "error_code": err.code,
                "status_code": err.http_status,
            })
            return send_response(False, None, err.message, err.http_status)

        if isinstance(err, RequestEntityTooLarge):
            message = f"Request body must be at most {bytes_to_mb(cfg.max_request_bytes)} MB"
            return send_response(False, None, message, 413)

        # If it's a standard HTTPException (like 404, 405)
        if isinstance(err, HTTPException):
            return send_response(False, None, err.description, err.code)

        # fallback
        logger.exception("unhandled_error", extra={"request_id": getattr(g, "request_id", None)})
        return send_response(False, None, "An unexpected error occurred.", 500)

    return app


if __name__ == "__main__":
    config = load_config()
    create_app(config).run(host=config.host, port=config.port)
