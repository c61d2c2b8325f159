"""In-memory todo store."""

import asyncio
from dataclasses import replace

from ..errors import StoreError
from .base import TodoStore
from .models import Todo


class InMemoryTodoStore(TodoStore):
    """Dict-backed store, kept in insertion order.

    Records are copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, todos: list[Todo] | None = None) -> None:
        self._todos: dict[str, Todo] = {}
        self._lock = asyncio.Lock()
        for todo in todos or []:
            self._todos[todo.id] = _copy(todo)

    async def insert(self, todo: Todo) -> str:
        async with self._lock:
            if todo.id in self._todos:
                raise StoreError(f"Todo with id {todo.id} already exists")
            self._todos[todo.id] = _copy(todo)
        return todo.id

    async def get_by_id(self, todo_id: str) -> Todo | None:
        todo = self._todos.get(todo_id)
        return _copy(todo) if todo is not None else None

    async def get_all(self) -> list[Todo]:
        return [_copy(t) for t in self._todos.values()]

    async def put(self, todo: Todo) -> None:
        async with self._lock:
            self._todos[todo.id] = _copy(todo)

    async def delete_by_id(self, todo_id: str) -> None:
        async with self._lock:
            self._todos.pop(todo_id, None)

    async def clear(self) -> None:
        async with self._lock:
            self._todos.clear()

    def __len__(self) -> int:
        return len(self._todos)


def _copy(todo: Todo) -> Todo:
    return replace(todo, tags=list(todo.tags) if todo.tags is not None else None)
