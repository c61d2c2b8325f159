"""SQLite storage for todos."""

import asyncio
import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Callable, TypeVar

from ..errors import StoreError
from .base import TodoStore
from .models import Todo

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLiteTodoStore(TodoStore):
    """Persistent storage for todos using SQLite.

    Blocking SQLite calls run in a worker thread. A single connection is
    shared behind a lock, so writers are serialized.
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize the store with a database path.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def init_db(self) -> None:
        """Create the todos table if it doesn't exist.

        Raises:
            StoreError: If the database cannot be opened or initialized.
        """
        try:
            conn = self._get_connection()
            conn.execute("""
                CREATE TABLE IF NOT EXISTS todos (
                    id          TEXT PRIMARY KEY,
                    title       TEXT NOT NULL,
                    description TEXT,
                    completed   INTEGER NOT NULL DEFAULT 0,
                    created_at  INTEGER NOT NULL,
                    updated_at  INTEGER NOT NULL,
                    tags        TEXT
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_todos_completed ON todos(completed)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_todos_created_at ON todos(created_at)")
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"Cannot open todo database {self.db_path}: {e}") from e
        logger.info("Todo store ready db=%s", self.db_path)

    async def _run(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        """Run fn against the connection in a worker thread."""

        def call() -> T:
            with self._lock:
                try:
                    return fn(self._get_connection())
                except sqlite3.Error as e:
                    raise StoreError(f"Storage failure: {e}") from e

        return await asyncio.to_thread(call)

    async def insert(self, todo: Todo) -> str:
        def op(conn: sqlite3.Connection) -> str:
            try:
                conn.execute(
                    """
                    INSERT INTO todos (id, title, description, completed, created_at, updated_at, tags)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    self._todo_to_params(todo),
                )
            except sqlite3.IntegrityError as e:
                raise StoreError(f"Todo with id {todo.id} already exists") from e
            conn.commit()
            return todo.id

        return await self._run(op)

    async def get_by_id(self, todo_id: str) -> Todo | None:
        def op(conn: sqlite3.Connection) -> Todo | None:
            cursor = conn.execute("SELECT * FROM todos WHERE id = ?", (todo_id,))
            row = cursor.fetchone()
            return self._row_to_todo(row) if row else None

        return await self._run(op)

    async def get_all(self) -> list[Todo]:
        def op(conn: sqlite3.Connection) -> list[Todo]:
            cursor = conn.execute("SELECT * FROM todos ORDER BY rowid")
            return [self._row_to_todo(row) for row in cursor.fetchall()]

        return await self._run(op)

    async def put(self, todo: Todo) -> None:
        def op(conn: sqlite3.Connection) -> None:
            conn.execute(
                """
                INSERT INTO todos (id, title, description, completed, created_at, updated_at, tags)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title = excluded.title,
                    description = excluded.description,
                    completed = excluded.completed,
                    created_at = excluded.created_at,
                    updated_at = excluded.updated_at,
                    tags = excluded.tags
                """,
                self._todo_to_params(todo),
            )
            conn.commit()

        await self._run(op)

    async def delete_by_id(self, todo_id: str) -> None:
        def op(conn: sqlite3.Connection) -> None:
            conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))
            conn.commit()

        await self._run(op)

    async def clear(self) -> None:
        def op(conn: sqlite3.Connection) -> None:
            cursor = conn.execute("DELETE FROM todos")
            conn.commit()
            logger.info("Cleared %s todo(s)", cursor.rowcount)

        await self._run(op)

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    @staticmethod
    def _todo_to_params(todo: Todo) -> tuple[Any, ...]:
        tags = json.dumps(todo.tags, ensure_ascii=False) if todo.tags is not None else None
        return (
            todo.id,
            todo.title,
            todo.description,
            int(todo.completed),
            todo.created_at,
            todo.updated_at,
            tags,
        )

    def _row_to_todo(self, row: sqlite3.Row) -> Todo:
        """Convert a database row to a Todo."""
        tags: list[str] | None = None
        if row["tags"] is not None:
            try:
                raw = json.loads(row["tags"])
                tags = [str(t) for t in raw] if isinstance(raw, list) else None
            except json.JSONDecodeError:
                logger.warning("Ignoring malformed tags for todo id=%s", row["id"])
        return Todo(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            completed=bool(row["completed"]),
            created_at=int(row["created_at"]),
            updated_at=int(row["updated_at"]),
            tags=tags,
        )
