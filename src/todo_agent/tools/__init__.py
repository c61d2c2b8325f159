"""Tool registry and todo tool implementations."""

from .args import ClearArgs, CreateArgs, ListArgs, TodoFilter, TodoIdArgs, ToolArgs, UpdateArgs
from .base import Tool
from .registry import ToolRegistry, build_registry
from .todos import (
    ClearCompletedTool,
    CreateTodoTool,
    DeleteTodoTool,
    ListTodosTool,
    ToggleTodoTool,
    UpdateTodoTool,
    default_tools,
)

__all__ = [
    "ClearArgs",
    "ClearCompletedTool",
    "CreateArgs",
    "CreateTodoTool",
    "DeleteTodoTool",
    "ListArgs",
    "ListTodosTool",
    "TodoFilter",
    "TodoIdArgs",
    "ToggleTodoTool",
    "Tool",
    "ToolArgs",
    "ToolRegistry",
    "UpdateArgs",
    "UpdateTodoTool",
    "build_registry",
    "default_tools",
]
