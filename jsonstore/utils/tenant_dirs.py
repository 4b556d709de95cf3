import json
from dataclasses import dataclass

from jsonstore.Logger.log_main import get_logger
from jsonstore.utils.file_index import EMPTY_INDEX

logger = get_logger()

INDEX_FILE = "fileIndex.json"
CONFIG_FILE = "config.json"

@dataclass(frozen=True)
class TenantPaths:
    tenant: str
    directory: str
    index_path: str
    config_path: str

class TenantProvisioner:
    """Lazily creates tenant directories under the storage root."""

    def __init__(self, storage):
        self.storage = storage

    def paths(self, tenant: str) -> TenantPaths:
        return TenantPaths(
            tenant=tenant,
            directory=self.storage.path(tenant),
            index_path=self.storage.path(tenant, INDEX_FILE),
            config_path=self.storage.path(tenant, CONFIG_FILE),
        )

    def blob_path(self, paths: TenantPaths, stored_name: str) -> str:
        return self.storage.path(paths.tenant, stored_name)

    def ensure(self, tenant: str) -> TenantPaths:
        paths = self.paths(tenant)
        self.storage.make_dirs(paths.directory)

        raw = self.storage.read_text(paths.index_path)
        if raw is None or not raw.strip():
            self.storage.write_text(paths.index_path, EMPTY_INDEX)
            return paths

        try:
            json.loads(raw)
        except ValueError as e:
            logger.warning("tenant_index_reset", extra={"tenant": tenant, "error": str(e)})
            self.storage.write_text(paths.index_path, EMPTY_INDEX)
        return paths
