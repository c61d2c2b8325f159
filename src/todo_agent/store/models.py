"""Data models for stored todos."""

import time
import uuid
from dataclasses import asdict, dataclass
from typing import Any


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def new_todo_id() -> str:
    """Generate a fresh todo identifier."""
    return uuid.uuid4().hex


@dataclass
class Todo:
    """A single todo item.

    Attributes:
        id: Unique identifier, assigned at creation and never changed.
        title: Non-empty title text.
        description: Optional free-text description.
        completed: Completion flag.
        created_at: Creation time in ms since epoch, set once.
        updated_at: Last mutation time in ms since epoch.
        tags: Optional ordered list of tags.
    """

    id: str
    title: str
    created_at: int
    updated_at: int
    description: str | None = None
    completed: bool = False
    tags: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Todo":
        """Create from a plain dict."""
        tags = data.get("tags")
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            created_at=int(data["created_at"]),
            updated_at=int(data["updated_at"]),
            description=data.get("description"),
            completed=bool(data.get("completed", False)),
            tags=list(tags) if tags is not None else None,
        )
