"""Resolve which todo an utterance refers to."""

from collections.abc import Sequence

from ..store import Todo

# (keywords, index). Checked in order before any title match.
ORDINALS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("first", "1st"), 0),
    (("second", "2nd"), 1),
    (("third", "3rd"), 2),
    (("last",), -1),
)


class ReferenceResolver:
    """Picks a todo by ordinal position or by title mention.

    Returns None rather than guessing when nothing matches.
    """

    def resolve(self, utterance: str, candidates: Sequence[Todo]) -> Todo | None:
        text = utterance.lower()

        for keywords, index in ORDINALS:
            if any(keyword in text for keyword in keywords):
                return self._at(candidates, index)

        for todo in candidates:
            if todo.title.lower() in text:
                return todo

        return None

    @staticmethod
    def _at(candidates: Sequence[Todo], index: int) -> Todo | None:
        if not candidates:
            return None
        if index >= len(candidates):
            return None
        return candidates[index]
