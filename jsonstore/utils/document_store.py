"""
Tenant-scoped JSON documents: one blob file per document plus an entry in the
tenant's fileIndex.json.

Lookups are linear scans of the tenant's index. Tenants hold a handful of
documents, so there is no secondary lookup structure.
"""
import json
import time
import uuid
from pathlib import PurePath
from typing import Any, Callable, Dict, List, Optional, Tuple

from jsonstore.Logger.log_main import get_logger
from jsonstore.Models.document_record import DocumentRecord
from jsonstore.utils.errors import (
    DuplicateNameError,
    InvalidPayloadError,
    MissingRequiredFieldError,
    NotFoundError,
    NotFoundOnDiskError,
    storage_errors,
)
from jsonstore.utils.file_index import FileIndex
from jsonstore.utils.tenant_dirs import TenantPaths, TenantProvisioner
from jsonstore.utils.tenant_locks import TenantLocks

logger = get_logger()

def _require_object(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise InvalidPayloadError("Invalid JSON format")
    return payload

def _clean_name(name: Any) -> Optional[str]:
    if name is None:
        return None
    if not isinstance(name, str):
        raise InvalidPayloadError("Display name must be a string")
    return name.strip() or None


class DocumentStore:
    def __init__(
        self,
        storage,
        enforce_unique_display_name: bool = True,
        require_display_name: bool = False,
        duplicate_name_status: int = 409,
        locks: Optional[TenantLocks] = None,
        clock: Callable[[], str] = DocumentRecord.now_iso,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self.storage = storage
        self.provisioner = TenantProvisioner(storage)
        self.index = FileIndex(storage)
        self.enforce_unique_display_name = enforce_unique_display_name
        self.require_display_name = require_display_name
        self.duplicate_name_status = duplicate_name_status
        self.locks = locks or TenantLocks()
        self.clock = clock
        self.id_factory = id_factory

    def _blob_path(self, paths: TenantPaths, record: DocumentRecord) -> Optional[str]:
        name = record.stored_name
        # a hand-edited index must not point outside the tenant directory
        if not name or PurePath(name).name != name or name in (".", ".."):
            return None
        return self.provisioner.blob_path(paths, name)

    def _find(self, records: List[DocumentRecord], doc_id: str) -> DocumentRecord:
        for record in records:
            if record.id == doc_id:
                return record
        raise NotFoundError("File not found")

    def _check_unique(self, records: List[DocumentRecord], name: str, exclude_id: Optional[str] = None) -> None:
        if not self.enforce_unique_display_name:
            return
        if any(r.display_name == name and r.id != exclude_id for r in records):
            raise DuplicateNameError("Report name already used, choose another", self.duplicate_name_status)

    def _write_blob(self, path: str, payload: Dict[str, Any]) -> None:
        self.storage.write_text(path, json.dumps(payload, indent=2))

    @storage_errors("saving file")
    def save(self, tenant: str, payload: Any, display_name: Any = None) -> DocumentRecord:
        payload = _require_object(payload)
        name = _clean_name(display_name)
        if name is None:
            if self.require_display_name:
                raise MissingRequiredFieldError("Report name is required")
            name = f"data_{int(time.time() * 1000)}"

        with self.locks.hold(tenant):
            paths = self.provisioner.ensure(tenant)
            records = self.index.load(paths.index_path)
            self._check_unique(records, name)

            doc_id = self.id_factory()
            now = self.clock()
            record = DocumentRecord(
                id=doc_id,
                stored_name=f"{doc_id}.json",
                display_name=name,
                created_at=now,
                updated_at=now,
            )
            self._write_blob(self._blob_path(paths, record), payload)
            records.append(record)
            self.index.persist(paths.index_path, records)

        logger.info("document_saved", extra={"tenant": tenant, "doc_id": doc_id})
        return record

    @storage_errors("reading files")
    def list(self, tenant: str) -> List[DocumentRecord]:
        paths = self.provisioner.ensure(tenant)
        return FileIndex.sorted_by_creation(self.index.load(paths.index_path))

    @storage_errors("reading file")
    def get(self, tenant: str, doc_id: str) -> Tuple[DocumentRecord, Dict[str, Any]]:
        paths = self.provisioner.ensure(tenant)
        record = self._find(self.index.load(paths.index_path), doc_id)

        blob_path = self._blob_path(paths, record)
        raw = self.storage.read_text(blob_path) if blob_path else None
        if raw is None:
            raise NotFoundOnDiskError("File not found on disk")
        return record, json.loads(raw)

    @storage_errors("updating file")
    def update(self, tenant: str, doc_id: str, payload: Any = None, new_display_name: Any = None) -> DocumentRecord:
        """
        Partial update. Only the supplied fields change; updatedAt is refreshed
        even when nothing else is supplied.
        """
        if payload is not None:
            payload = _require_object(payload)
        new_name = _clean_name(new_display_name)

        with self.locks.hold(tenant):
            paths = self.provisioner.ensure(tenant)
            records = self.index.load(paths.index_path)
            record = self._find(records, doc_id)

            blob_path = self._blob_path(paths, record)
            if blob_path is None or not self.storage.exists(blob_path):
                raise NotFoundOnDiskError("File not found on disk")

            if new_name is not None and new_name != record.display_name:
                self._check_unique(records, new_name, exclude_id=doc_id)
                record.display_name = new_name

            if payload is not None:
                self._write_blob(blob_path, payload)

            record.updated_at = self.clock()
            self.index.persist(paths.index_path, records)

        logger.info("document_updated", extra={"tenant": tenant, "doc_id": doc_id})
        return record

    @storage_errors("deleting file")
    def delete(self, tenant: str, doc_id: str) -> str:
        with self.locks.hold(tenant):
            paths = self.provisioner.ensure(tenant)
            records = self.index.load(paths.index_path)
            record = self._find(records, doc_id)

            blob_path = self._blob_path(paths, record)
            if blob_path is not None:
                self.storage.delete(blob_path)

            self.index.persist(paths.index_path, [r for r in records if r.id != doc_id])

        logger.info("document_deleted", extra={"tenant": tenant, "doc_id": doc_id})
        return doc_id
