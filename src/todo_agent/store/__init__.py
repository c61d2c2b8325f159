"""Todo storage."""

from .base import TodoStore
from .factory import open_store
from .memory import InMemoryTodoStore
from .models import Todo, new_todo_id, now_ms
from .sqlite import SQLiteTodoStore

__all__ = [
    "InMemoryTodoStore",
    "SQLiteTodoStore",
    "Todo",
    "TodoStore",
    "new_todo_id",
    "now_ms",
    "open_store",
]
