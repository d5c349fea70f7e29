from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Serialized mod_time for items whose stat failed.
ZERO_TIME = "0001-01-01T00:00:00Z"


@dataclass
class IndexItem:
    path: str
    size: int = 0
    mod_time: str = ZERO_TIME
    summary: str = ""
    keywords: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def fail(self, message: str) -> "IndexItem":
        """Mark the item as failed; summary and keywords are cleared."""
        self.summary = ""
        self.keywords = []
        self.error = message or "unknown error"
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": self.path,
            "size": self.size,
            "mod_time": self.mod_time,
            "summary": self.summary,
            "keywords": list(self.keywords),
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class Index:
    dir: str
    generated: str
    model: str
    items: List[IndexItem]

    @property
    def error_count(self) -> int:
        return sum(1 for item in self.items if not item.ok)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dir": self.dir,
            "generated": self.generated,
            "model": self.model,
            "items": [item.to_dict() for item in self.items],
        }
