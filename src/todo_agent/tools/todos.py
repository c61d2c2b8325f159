"""Todo CRUD tools."""

import asyncio
import logging
from dataclasses import replace
from typing import Any

from ..errors import NotFoundError
from ..store import Todo, TodoStore, new_todo_id, now_ms
from .args import ClearArgs, CreateArgs, ListArgs, TodoFilter, TodoIdArgs, UpdateArgs
from .base import Tool

logger = logging.getLogger(__name__)


class TodoTool(Tool):
    """Base for tools that operate on a todo store."""

    def __init__(self, store: TodoStore) -> None:
        """Initialize with a todo store.

        Args:
            store: The TodoStore the tool reads and writes.
        """
        self.store = store

    async def _get_existing(self, todo_id: str) -> Todo:
        existing = await self.store.get_by_id(todo_id)
        if existing is None:
            raise NotFoundError(todo_id)
        return existing


def _touch(todo: Todo, **changes: Any) -> Todo:
    """Copy todo with changes applied and updated_at refreshed."""
    return replace(todo, **changes, updated_at=max(now_ms(), todo.updated_at))


class ListTodosTool(TodoTool):
    args_type = ListArgs

    @property
    def name(self) -> str:
        return "list_todos"

    @property
    def description(self) -> str:
        return "Get all todo items. Returns an array of todos with their details."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "filter": {
                    "type": "string",
                    "enum": [f.value for f in TodoFilter],
                    "description": "Filter todos by completion status",
                },
            },
        }

    @property
    def mutating(self) -> bool:
        return False

    async def execute(self, args: ListArgs) -> list[Todo]:
        todos = await self.store.get_all()

        if args.filter is TodoFilter.COMPLETED:
            return [t for t in todos if t.completed]
        if args.filter is TodoFilter.PENDING:
            return [t for t in todos if not t.completed]

        return sorted(todos, key=lambda t: t.created_at, reverse=True)


class CreateTodoTool(TodoTool):
    args_type = CreateArgs

    @property
    def name(self) -> str:
        return "create_todo"

    @property
    def description(self) -> str:
        return "Create a new todo item. Returns the created todo with its generated ID."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "title": {
                    "type": "string",
                    "description": "The title of the todo item",
                },
                "description": {
                    "type": "string",
                    "description": "Optional detailed description of the todo",
                },
                "tags": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Optional tags for categorizing the todo",
                },
            },
            "required": ["title"],
        }

    async def execute(self, args: CreateArgs) -> Todo:
        now = now_ms()
        todo = Todo(
            id=new_todo_id(),
            title=args.title,
            description=args.description,
            completed=False,
            created_at=now,
            updated_at=now,
            tags=args.tags,
        )

        await self.store.insert(todo)
        logger.debug("Todo created id=%s", todo.id)
        return todo


class UpdateTodoTool(TodoTool):
    args_type = UpdateArgs

    @property
    def name(self) -> str:
        return "update_todo"

    @property
    def description(self) -> str:
        return (
            "Update an existing todo item. "
            "Can modify title, description, completion status, or tags."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "The ID of the todo to update"},
                "title": {"type": "string", "description": "New title for the todo"},
                "description": {
                    "type": "string",
                    "description": "New description for the todo",
                },
                "completed": {"type": "boolean", "description": "New completion status"},
                "tags": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "New tags for the todo",
                },
            },
            "required": ["id"],
        }

    async def execute(self, args: UpdateArgs) -> Todo:
        existing = await self._get_existing(args.id)
        updated = _touch(existing, **args.changes())
        await self.store.put(updated)
        return updated


class ToggleTodoTool(TodoTool):
    args_type = TodoIdArgs

    @property
    def name(self) -> str:
        return "toggle_todo"

    @property
    def description(self) -> str:
        return "Toggle the completion status of a todo item. Returns the updated todo."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "The ID of the todo to toggle"},
            },
            "required": ["id"],
        }

    async def execute(self, args: TodoIdArgs) -> Todo:
        existing = await self._get_existing(args.id)
        updated = _touch(existing, completed=not existing.completed)
        await self.store.put(updated)
        return updated


class DeleteTodoTool(TodoTool):
    args_type = TodoIdArgs

    @property
    def name(self) -> str:
        return "delete_todo"

    @property
    def description(self) -> str:
        return "Delete a todo item by its ID. Returns success confirmation."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "The ID of the todo to delete"},
            },
            "required": ["id"],
        }

    async def execute(self, args: TodoIdArgs) -> dict[str, Any]:
        await self._get_existing(args.id)
        await self.store.delete_by_id(args.id)
        return {"success": True, "deleted_id": args.id}


class ClearCompletedTool(TodoTool):
    args_type = ClearArgs

    @property
    def name(self) -> str:
        return "clear_completed"

    @property
    def description(self) -> str:
        return "Delete all completed todo items. Returns the number of items deleted."

    @property
    def parameters(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}}

    async def execute(self, args: ClearArgs) -> dict[str, Any]:
        todos = await self.store.get_all()
        completed = [t for t in todos if t.completed]

        await asyncio.gather(*(self.store.delete_by_id(t.id) for t in completed))

        return {"success": True, "deleted_count": len(completed)}


def default_tools(store: TodoStore) -> list[Tool]:
    """The fixed catalog of todo tools bound to a store."""
    return [
        ListTodosTool(store),
        CreateTodoTool(store),
        UpdateTodoTool(store),
        DeleteTodoTool(store),
        ToggleTodoTool(store),
        ClearCompletedTool(store),
    ]
