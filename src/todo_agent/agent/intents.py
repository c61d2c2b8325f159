"""Keyword-based intent resolution."""

import re
from dataclasses import dataclass
from enum import Enum


class Intent(Enum):
    """What an utterance asks the agent to do."""

    LIST = "list"
    CREATE = "create"
    COMPLETE = "complete"
    DELETE = "delete"
    HELP = "help"
    UNRECOGNIZED = "unrecognized"


# A delete verb directly followed by a completed-family word:
# "clear completed", "remove all finished", "delete the done todos".
CLEAR_COMPLETED_PATTERN = re.compile(
    r"\b(?:clear|remove|delete)\s+(?:(?:all|the|my)\s+)*(?:completed|done|finished)\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class IntentRule:
    """An intent and the keywords or phrase patterns that select it."""

    intent: Intent
    keywords: tuple[str, ...] = ()
    patterns: tuple[re.Pattern[str], ...] = ()

    def matches(self, text: str) -> bool:
        """Whether any keyword occurs in, or any pattern matches, the (lower-cased) text."""
        if any(keyword in text for keyword in self.keywords):
            return True
        return any(pattern.search(text) for pattern in self.patterns)


# Order is precedence: the first matching rule wins, so "show" beats "add".
DEFAULT_RULES: tuple[IntentRule, ...] = (
    IntentRule(Intent.LIST, ("list", "show", "get", "what", "display")),
    IntentRule(Intent.CREATE, ("add", "create", "new", "make")),
    # Narrow phrase rule; must come before COMPLETE, which would claim "completed".
    IntentRule(Intent.DELETE, patterns=(CLEAR_COMPLETED_PATTERN,)),
    IntentRule(Intent.COMPLETE, ("complete", "done", "finish", "mark")),
    IntentRule(Intent.DELETE, ("delete", "remove", "clear")),
    IntentRule(Intent.HELP, ("help", "what can", "how", "capabilities")),
)


class IntentResolver:
    """Maps an utterance to an Intent using an ordered rule list."""

    def __init__(self, rules: tuple[IntentRule, ...] | list[IntentRule] | None = None) -> None:
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES

    def resolve(self, utterance: str) -> Intent:
        """Return the intent of the first matching rule, or UNRECOGNIZED."""
        text = utterance.lower()
        for rule in self.rules:
            if rule.matches(text):
                return rule.intent
        return Intent.UNRECOGNIZED
