"""Pattern rules for pulling tool arguments out of an utterance.

Extraction runs on the original-case text so titles keep their casing.
Keyword checks are done on a lower-cased copy.
"""

import re

from ..tools.args import CreateArgs, ListArgs, TodoFilter
from .intents import CLEAR_COMPLETED_PATTERN

_VERBS = r"(?:add|create|new|make)"
_UNTIL_DESCRIPTION = r"(?:\s+description:|$)"

# Most specific first.
TITLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"{_VERBS}(?:\s+(?:a\s+)?todo)?:\s*(.+?){_UNTIL_DESCRIPTION}", re.IGNORECASE),
    re.compile(rf"{_VERBS}\s+(?:a\s+)?todo\s+(.+?){_UNTIL_DESCRIPTION}", re.IGNORECASE),
    re.compile(rf"{_VERBS}\s+(.+?){_UNTIL_DESCRIPTION}", re.IGNORECASE),
)

DESCRIPTION_PATTERN = re.compile(r"description:\s*(.+?)(?:\s+tags:|$)", re.IGNORECASE)
TAGS_PATTERN = re.compile(r"tags?:\s*(.+?)$", re.IGNORECASE)
HASHTAG_PATTERN = re.compile(r"#(\w+)")

COMPLETED_KEYWORDS = ("completed", "done", "finished")
PENDING_KEYWORDS = ("pending", "active", "incomplete")


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


class ArgumentExtractor:
    """Builds typed tool arguments from raw utterances."""

    def extract_filter(
        self, utterance: str, default: TodoFilter = TodoFilter.ALL
    ) -> TodoFilter:
        """Completion filter named in the utterance, or default."""
        text = utterance.lower()
        if _contains_any(text, COMPLETED_KEYWORDS):
            return TodoFilter.COMPLETED
        if _contains_any(text, PENDING_KEYWORDS):
            return TodoFilter.PENDING
        return default

    def requests_clear_completed(self, utterance: str) -> bool:
        """Whether the utterance asks to delete every completed todo."""
        return CLEAR_COMPLETED_PATTERN.search(utterance) is not None

    def extract_title(self, utterance: str) -> str | None:
        for pattern in TITLE_PATTERNS:
            match = pattern.search(utterance)
            if match and match.group(1).strip():
                return match.group(1).strip()
        return None

    def extract_description(self, utterance: str) -> str | None:
        match = DESCRIPTION_PATTERN.search(utterance)
        return match.group(1).strip() if match else None

    def extract_tags(self, utterance: str) -> list[str] | None:
        """Tags from a "tags:" marker, else from #hashtags, else None."""
        match = TAGS_PATTERN.search(utterance)
        if match:
            return [t.strip() for t in match.group(1).split(",") if t.strip()]

        hashtags = HASHTAG_PATTERN.findall(utterance)
        if hashtags:
            return hashtags

        return None

    def list_args(self, utterance: str) -> ListArgs:
        return ListArgs(filter=self.extract_filter(utterance))

    def create_args(self, utterance: str) -> CreateArgs | None:
        """Arguments for create_todo, or None when no title can be found."""
        title = self.extract_title(utterance)
        if not title:
            return None
        return CreateArgs(
            title=title,
            description=self.extract_description(utterance),
            tags=self.extract_tags(utterance),
        )
