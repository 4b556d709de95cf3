import json
from datetime import datetime, timezone
from typing import List

from jsonstore.Logger.log_main import get_logger
from jsonstore.Models.document_record import DocumentRecord

logger = get_logger()

EMPTY_INDEX = json.dumps([], indent=2)

def _parse_ts(value: str) -> datetime:
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts

class FileIndex:
    """
    The per-tenant catalog of stored documents (fileIndex.json).

    Callers load, mutate the returned list and persist it again inside one
    operation; persist replaces the whole file, so the last writer wins.
    """
    def __init__(self, storage):
        self.storage = storage

    def load(self, index_path: str) -> List[DocumentRecord]:
        raw = self.storage.read_text(index_path)
        if raw is None or not raw.strip():
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        except ValueError as e:
            # corrupt index: start over with an empty catalog
            logger.warning("index_reset", extra={"path": index_path, "error": str(e)})
            self.storage.write_text(index_path, EMPTY_INDEX)
            return []

        records = []
        for entry in data:
            if not isinstance(entry, dict):
                logger.warning("index_entry_dropped", extra={"path": index_path, "error": repr(entry)[:200]})
                continue
            records.append(DocumentRecord.from_dict(entry))
        return records

    def persist(self, index_path: str, records: List[DocumentRecord]) -> None:
        self.storage.write_text(index_path, json.dumps([r.to_dict() for r in records], indent=2))

    @staticmethod
    def sorted_by_creation(records: List[DocumentRecord]) -> List[DocumentRecord]:
        """Newest first; equal timestamps keep index order."""
        return sorted(records, key=lambda r: _parse_ts(r.created_at), reverse=True)
