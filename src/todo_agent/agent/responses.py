"""Reply text for each turn outcome."""

from collections.abc import Sequence

from ..errors import NotFoundError, ValidationError
from ..store import Todo
from ..tools.args import TodoFilter

GREETING = (
    "Hi! I'm your todo agent. I can help you manage your todos through natural "
    "language. Try asking me to list, create, complete, or delete todos!"
)

HELP_TEXT = """I can help you manage your todos! Here's what I can do:

• List todos: "Show all todos", "List pending todos"
• Create todos: "Add a todo: Buy milk", "Create: Fix bug #urgent"
• Complete todos: "Mark the first one as done", "Complete Buy milk"
• Delete todos: "Delete the second todo", "Remove Buy milk"
• Clear completed: "Clear all completed todos"

Just ask me in natural language and I'll help!"""

FALLBACK_TEXT = """I'm not sure what you want me to do. Try asking me to:
• List your todos
• Add a new todo
• Mark a todo as complete
• Delete a todo

Or type "help" to see all my capabilities!"""

MISSING_TITLE = 'I need a title to create a todo. Try: "Add a todo: Buy groceries"'
NOTHING_TO_COMPLETE = "No pending todos to complete."
WHICH_TO_COMPLETE = (
    'Which todo would you like to complete? Try: "Complete the first one" '
    "or mention the todo title."
)
WHICH_TO_DELETE = (
    'Which todo would you like to delete? Try: "Delete the first one" '
    "or mention the todo title."
)

CHECKED = "✓"
UNCHECKED = "○"


def pluralize(count: int, noun: str) -> str:
    """'1 todo', '2 todos'."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _filter_prefix(todo_filter: TodoFilter) -> str:
    return "" if todo_filter is TodoFilter.ALL else f"{todo_filter.value} "


def format_todo_line(index: int, todo: Todo) -> str:
    glyph = CHECKED if todo.completed else UNCHECKED
    line = f"{index}. {glyph} {todo.title}"
    if todo.description:
        line += f"\n   {todo.description}"
    return line


def format_list(todos: Sequence[Todo], todo_filter: TodoFilter) -> str:
    """Numbered list of todos, or the empty phrasing for this filter."""
    prefix = _filter_prefix(todo_filter)
    if not todos:
        return f"No {prefix}todos found."

    header = f"Found {len(todos)} {prefix}todo(s):"
    lines = [format_todo_line(i, todo) for i, todo in enumerate(todos, start=1)]
    return header + "\n\n" + "\n".join(lines)


def format_created(todo: Todo) -> str:
    text = f'Created todo: "{todo.title}"'
    if todo.description:
        text += f"\nDescription: {todo.description}"
    if todo.tags:
        text += f"\nTags: {', '.join(todo.tags)}"
    return text


def format_completed(todo: Todo) -> str:
    return f'Marked "{todo.title}" as complete!'


def format_deleted(todo: Todo) -> str:
    return f'Deleted "{todo.title}".'


def format_cleared(deleted_count: int) -> str:
    return f"Cleared {deleted_count} completed todo(s)."


def format_error(error: Exception) -> str:
    """Reply for a failed turn."""
    if isinstance(error, ValidationError):
        return f"Error: {error}. Please try again with the missing details."
    if isinstance(error, NotFoundError):
        return f"Error: {error}. It may have been deleted already."
    return f"Error: {str(error) or 'Unknown error occurred'}"
