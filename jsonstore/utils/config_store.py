import json
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from jsonstore.Logger.log_main import get_logger
from jsonstore.utils.errors import InvalidPayloadError, StorageError, storage_errors
from jsonstore.utils.tenant_dirs import TenantProvisioner
from jsonstore.utils.tenant_locks import TenantLocks

logger = get_logger()

DEFAULT_PROJECT_LOGO = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNk"
    "YAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

DEFAULT_THEME: Dict[str, Any] = {
    "projectName": "Ace High Chart",
    "sidebarColor": "#1b273a",
    "mainBackgroundColor": "#ffffff",
    "textColor": "#ffffff",
    "projectLogo": DEFAULT_PROJECT_LOGO,
    "chartBackgroundColor": "#ffffff",
    "selectedColor": "#196ba7",
}

def default_config() -> Dict[str, Any]:
    return {"id": str(uuid.uuid4()), **DEFAULT_THEME}


class ConfigStore:
    """
    The per-tenant config.json. Created with the default theme on first read,
    replaced wholesale on write.
    """
    def __init__(self, storage, default_template_path: str = "", locks: Optional[TenantLocks] = None):
        self.storage = storage
        self.provisioner = TenantProvisioner(storage)
        self.default_template_path = default_template_path
        self.locks = locks or TenantLocks()

    def _write(self, path: str, config: Dict[str, Any]) -> None:
        self.storage.write_text(path, json.dumps(config, indent=2))

    def _template(self) -> Dict[str, Any]:
        if not self.default_template_path:
            return default_config()
        try:
            template = json.loads(Path(self.default_template_path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Error loading default configuration: {e}") from e
        if not isinstance(template, dict):
            raise StorageError("Default configuration template is not a JSON object")
        return template

    @storage_errors("loading configuration")
    def get(self, tenant: str) -> Tuple[Dict[str, Any], bool]:
        with self.locks.hold(tenant):
            paths = self.provisioner.ensure(tenant)
            raw = self.storage.read_text(paths.config_path)
            if raw is not None:
                return json.loads(raw), False

            config = default_config()
            self._write(paths.config_path, config)

        logger.info("config_created", extra={"tenant": tenant})
        return config, True

    @storage_errors("saving configuration")
    def put(self, tenant: str, new_config: Any) -> Dict[str, Any]:
        """Replace the tenant config; an empty body restores the default template."""
        if new_config is None or new_config == {}:
            new_config = self._template()
        if not isinstance(new_config, dict):
            raise InvalidPayloadError("Invalid config format")

        with self.locks.hold(tenant):
            paths = self.provisioner.ensure(tenant)
            self._write(paths.config_path, new_config)

        logger.info("config_saved", extra={"tenant": tenant})
        return new_config
