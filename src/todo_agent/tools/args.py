"""Typed arguments for each todo tool.

Arguments are checked when they are built, so a tool body never sees a
missing title or id.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any

from ..errors import ValidationError


class TodoFilter(Enum):
    """Completion filter for listing todos."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    return [str(t).strip() for t in tags if str(t).strip()]


class ToolArgs(ABC):
    """Base for typed tool arguments."""

    def validate(self) -> None:
        """Raise ValidationError if the arguments are unusable."""
        return None

    def to_dict(self) -> dict[str, Any]:
        """Arguments as a plain dict, omitting unset optional fields."""
        data = asdict(self)  # type: ignore[call-overload]
        out: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            out[key] = value.value if isinstance(value, Enum) else value
        return out

    @classmethod
    @abstractmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolArgs":
        """Build typed arguments from a raw dict.

        Raises:
            ValidationError: If a required field is missing or invalid.
        """
        ...


@dataclass
class ListArgs(ToolArgs):
    filter: TodoFilter = TodoFilter.ALL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ListArgs":
        raw = data.get("filter") or TodoFilter.ALL.value
        try:
            return cls(filter=TodoFilter(raw))
        except ValueError as e:
            raise ValidationError(f"Unknown filter: {raw}") from e


@dataclass
class CreateArgs(ToolArgs):
    title: str
    description: str | None = None
    tags: list[str] | None = None

    def __post_init__(self) -> None:
        self.validate()
        self.title = self.title.strip()
        self.tags = _clean_tags(self.tags)

    def validate(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Title is required to create a todo")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreateArgs":
        return cls(
            title=data.get("title") or "",
            description=data.get("description"),
            tags=data.get("tags"),
        )


@dataclass
class UpdateArgs(ToolArgs):
    """Partial update. Fields left as None are not touched."""

    id: str
    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    tags: list[str] | None = None

    def __post_init__(self) -> None:
        self.validate()
        if self.title is not None:
            self.title = self.title.strip()
        self.tags = _clean_tags(self.tags)

    def validate(self) -> None:
        if not self.id:
            raise ValidationError("Missing required argument: id")
        if self.title is not None and not self.title.strip():
            raise ValidationError("Title cannot be empty")

    def changes(self) -> dict[str, Any]:
        """Fields present in this update, excluding the id."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "id" and getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UpdateArgs":
        return cls(
            id=data.get("id") or "",
            title=data.get("title"),
            description=data.get("description"),
            completed=data.get("completed"),
            tags=data.get("tags"),
        )


@dataclass
class TodoIdArgs(ToolArgs):
    id: str

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.id:
            raise ValidationError("Missing required argument: id")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TodoIdArgs":
        return cls(id=data.get("id") or "")


@dataclass
class ClearArgs(ToolArgs):
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClearArgs":
        return cls()
