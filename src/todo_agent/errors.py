"""Errors raised by todo operations and storage."""


class OperationError(Exception):
    """Base class for failures of a todo operation."""

    pass


class ValidationError(OperationError):
    """Raised when a required argument is missing or empty."""

    pass


class NotFoundError(OperationError):
    """Raised when a referenced todo does not exist."""

    def __init__(self, todo_id: str) -> None:
        super().__init__(f"Todo with id {todo_id} not found")
        self.todo_id = todo_id


class StoreError(OperationError):
    """Raised when the underlying storage fails."""

    pass
