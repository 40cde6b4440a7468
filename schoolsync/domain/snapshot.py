"""Session snapshot of a paginated entity list."""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class Snapshot:
    entities: List[dict] = field(default_factory=list)
    next_page_token: Optional[str] = None

    def to_dict(self) -> dict:
        return {"students": list(self.entities), "nextPageToken": self.next_page_token}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Snapshot"]:
        """Rebuild a snapshot from its stored form, or None if it is unusable."""
        if not isinstance(data, dict):
            return None
        entities = data.get("students")
        if not isinstance(entities, list):
            return None
        return cls(
            entities=[e for e in entities if isinstance(e, dict)],
            next_page_token=data.get("nextPageToken") or None,
        )
