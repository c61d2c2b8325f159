"""Tool registry for managing and dispatching tools."""

import logging
from typing import Any

from ..errors import OperationError, StoreError
from ..store import TodoStore
from .args import ToolArgs
from .base import Tool
from .todos import default_tools

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry for available tools.

    Once frozen, no tools can be added.
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._frozen = False

    def register(self, tool: Tool) -> None:
        """Register a tool."""
        if self._frozen:
            raise RuntimeError("Tool registry is frozen")
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' already registered")
        self._tools[tool.name] = tool

    def freeze(self) -> None:
        """Prevent further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Tool | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[str]:
        """List all registered tool names."""
        return list(self._tools.keys())

    def list_operations(self) -> list[dict[str, Any]]:
        """Discovery entries (name, description, input_schema) for all tools."""
        return [tool.get_schema() for tool in self._tools.values()]

    async def execute(self, tool_name: str, args: dict[str, Any] | ToolArgs) -> Any:
        """Execute a tool call by name.

        Arguments are validated before the tool body runs, so invalid calls
        never reach the store.

        Raises:
            OperationError: On an unknown tool, invalid arguments, a missing
                todo or a storage failure.
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            raise OperationError(f"Unknown tool: {tool_name}")

        typed_args = tool.parse_args(args)

        try:
            return await tool.execute(typed_args)
        except OperationError:
            raise
        except Exception as e:
            logger.exception("Tool %s failed", tool_name)
            raise StoreError(f"Tool execution failed: {e}") from e


def build_registry(store: TodoStore) -> ToolRegistry:
    """Create a frozen registry with the todo tools bound to store."""
    registry = ToolRegistry()
    for tool in default_tools(store):
        registry.register(tool)
    registry.freeze()
    return registry
