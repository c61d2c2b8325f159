"""Base tool interface."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ..errors import ValidationError
from .args import ToolArgs


class Tool(ABC):
    """Base interface for all tools."""

    args_type: ClassVar[type[ToolArgs]]

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable tool description."""
        ...

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """JSON Schema for tool parameters."""
        ...

    @property
    def mutating(self) -> bool:
        """Whether the tool writes to the store."""
        return True

    @abstractmethod
    async def execute(self, args: Any) -> Any:
        """Execute the tool with already-validated typed arguments."""
        ...

    def get_schema(self) -> dict[str, Any]:
        """Get the discovery entry for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters,
        }

    def validate_args(self, args: dict[str, Any]) -> None:
        """Check presence and primitive kinds of arguments.

        Raises:
            ValidationError: If a required field is missing or has the wrong kind.
        """
        required = self.parameters.get("required", [])
        properties = self.parameters.get("properties", {})

        for field in required:
            if field not in args or args[field] is None:
                raise ValidationError(f"Missing required argument: {field}")

        for key, value in args.items():
            if key not in properties or value is None:
                continue
            expected_type = properties[key].get("type")
            if expected_type == "string" and not isinstance(value, str):
                raise ValidationError(f"Argument '{key}' must be a string")
            if expected_type == "boolean" and not isinstance(value, bool):
                raise ValidationError(f"Argument '{key}' must be a boolean")
            if expected_type == "array" and not isinstance(value, list):
                raise ValidationError(f"Argument '{key}' must be an array")
            allowed = properties[key].get("enum")
            if allowed and value not in allowed:
                raise ValidationError(
                    f"Argument '{key}' must be one of: {', '.join(allowed)}"
                )

    def parse_args(self, args: dict[str, Any] | ToolArgs) -> ToolArgs:
        """Turn raw arguments into this tool's typed arguments."""
        if isinstance(args, self.args_type):
            args.validate()
            return args
        if isinstance(args, ToolArgs):
            raise ValidationError(
                f"Tool '{self.name}' does not accept {type(args).__name__}"
            )
        self.validate_args(args)
        return self.args_type.from_dict(args)
