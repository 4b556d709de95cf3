from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

@dataclass
class DocumentRecord:
    id: str
    stored_name: str
    display_name: str
    created_at: str
    updated_at: str

    @staticmethod
    def now_iso() -> str:
        return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DocumentRecord":
        return cls(
            id=str(raw.get("id", "")),
            stored_name=str(raw.get("filename", "")),
            display_name=str(raw.get("displayName", "")),
            created_at=str(raw.get("createdAt", "")),
            updated_at=str(raw.get("updatedAt", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        # key names match the fileIndex.json written by earlier deployments
        return {
            "id": self.id,
            "filename": self.stored_name,
            "displayName": self.display_name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
