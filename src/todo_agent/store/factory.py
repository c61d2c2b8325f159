"""Open the configured todo store."""

from ..config import AgentConfig
from .base import TodoStore
from .memory import InMemoryTodoStore
from .sqlite import SQLiteTodoStore


def open_store(config: AgentConfig) -> TodoStore:
    """Create and initialize the store selected by config.

    Raises:
        StoreError: If the SQLite database cannot be initialized.
    """
    if config.store_backend == "memory":
        return InMemoryTodoStore()

    store = SQLiteTodoStore(config.db_path)
    store.init_db()
    return store
