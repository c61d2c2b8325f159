"""Agent loop and core logic."""

from .extractor import ArgumentExtractor
from .intents import DEFAULT_RULES, Intent, IntentResolver, IntentRule
from .loop import InteractionRecord, Role, TodoAgent, ToolCallRecord, TurnState
from .references import ReferenceResolver

__all__ = [
    "DEFAULT_RULES",
    "ArgumentExtractor",
    "Intent",
    "IntentResolver",
    "IntentRule",
    "InteractionRecord",
    "ReferenceResolver",
    "Role",
    "TodoAgent",
    "ToolCallRecord",
    "TurnState",
]
