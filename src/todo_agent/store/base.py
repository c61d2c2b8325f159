"""Storage interface consumed by the todo tools."""

from abc import ABC, abstractmethod

from .models import Todo


class TodoStore(ABC):
    """Keyed collection of todo records.

    Implementations must serialize concurrent writers to the same key.
    No cross-key transactions are required.
    """

    @abstractmethod
    async def insert(self, todo: Todo) -> str:
        """Insert a new todo. Raises StoreError if the id already exists."""
        ...

    @abstractmethod
    async def get_by_id(self, todo_id: str) -> Todo | None:
        """Return the todo with this id, or None."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Todo]:
        """Return every todo. Order is not specified."""
        ...

    @abstractmethod
    async def put(self, todo: Todo) -> None:
        """Insert or overwrite the record for todo.id."""
        ...

    @abstractmethod
    async def delete_by_id(self, todo_id: str) -> None:
        """Remove a todo. No-op if absent."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove every todo."""
        ...

    def close(self) -> None:
        """Release any held resources."""
        return None
