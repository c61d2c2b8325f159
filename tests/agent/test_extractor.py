"""Tests for argument extraction."""

import pytest

from todo_agent.agent import ArgumentExtractor
from todo_agent.tools import TodoFilter


@pytest.fixture
def extractor() -> ArgumentExtractor:
    return ArgumentExtractor()


class TestExtractFilter:
    @pytest.mark.parametrize(
        "utterance, expected",
        [
            ("show completed", TodoFilter.COMPLETED),
            ("what is DONE", TodoFilter.COMPLETED),
            ("list finished todos", TodoFilter.COMPLETED),
            ("show pending", TodoFilter.PENDING),
            ("list active todos", TodoFilter.PENDING),
            ("show incomplete", TodoFilter.PENDING),
            ("show all todos", TodoFilter.ALL),
        ],
    )
    def test_filter(self, extractor: ArgumentExtractor, utterance: str, expected) -> None:
        assert extractor.extract_filter(utterance) is expected

    def test_completed_checked_before_pending(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_filter("pending or completed") is TodoFilter.COMPLETED

    def test_default_used_when_nothing_matches(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_filter("show", default=TodoFilter.PENDING) is TodoFilter.PENDING


class TestExtractTitle:
    @pytest.mark.parametrize(
        "utterance, expected",
        [
            ("Add a todo: Buy groceries", "Buy groceries"),
            ("Create: Fix bug #urgent", "Fix bug #urgent"),
            ("add todo: Call Mom", "Call Mom"),
            ("new todo Buy milk", "Buy milk"),
            ("Add a todo Water plants", "Water plants"),
            ("make Dinner reservations", "Dinner reservations"),
        ],
    )
    def test_patterns(self, extractor: ArgumentExtractor, utterance: str, expected: str) -> None:
        assert extractor.extract_title(utterance) == expected

    def test_preserves_case(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_title("ADD: Email the CEO") == "Email the CEO"

    def test_stops_at_description(self, extractor: ArgumentExtractor) -> None:
        title = extractor.extract_title("Add: Buy milk description: two litres")
        assert title == "Buy milk"

    def test_no_title(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_title("add") is None
        assert extractor.extract_title("add:   ") is None


class TestExtractDescription:
    def test_description(self, extractor: ArgumentExtractor) -> None:
        utterance = "Add: Buy milk description: two litres, semi-skimmed"
        assert extractor.extract_description(utterance) == "two litres, semi-skimmed"

    def test_stops_at_tags(self, extractor: ArgumentExtractor) -> None:
        utterance = "Add: Buy milk description: two litres tags: grocery"
        assert extractor.extract_description(utterance) == "two litres"

    def test_absent(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_description("Add: Buy milk") is None


class TestExtractTags:
    def test_tags_marker_keeps_order(self, extractor: ArgumentExtractor) -> None:
        tags = extractor.extract_tags("new todo buy milk tags: urgent, grocery")
        assert tags == ["urgent", "grocery"]

    def test_tags_marker_drops_empty_segments(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_tags("add: x tags: a, , b,") == ["a", "b"]

    def test_singular_tag_marker(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_tags("add: x tag: home") == ["home"]

    def test_hashtags(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_tags("Create: Fix bug #urgent #work") == ["urgent", "work"]

    def test_marker_wins_over_hashtags(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_tags("add: #home stuff tags: errand") == ["errand"]

    def test_none_when_absent(self, extractor: ArgumentExtractor) -> None:
        assert extractor.extract_tags("Add a todo: Buy groceries") is None


class TestCreateArgs:
    def test_scenario_without_extras(self, extractor: ArgumentExtractor) -> None:
        args = extractor.create_args("Add a todo: Buy groceries")
        assert args is not None
        assert args.title == "Buy groceries"
        assert args.description is None
        assert args.tags is None

    def test_full(self, extractor: ArgumentExtractor) -> None:
        args = extractor.create_args("Add: Buy milk description: two litres tags: grocery, urgent")
        assert args.title == "Buy milk"
        assert args.description == "two litres"
        assert args.tags == ["grocery", "urgent"]

    def test_none_without_title(self, extractor: ArgumentExtractor) -> None:
        assert extractor.create_args("add") is None


def test_list_args(extractor: ArgumentExtractor) -> None:
    assert extractor.list_args("show completed").filter is TodoFilter.COMPLETED


def test_requests_clear_completed(extractor: ArgumentExtractor) -> None:
    assert extractor.requests_clear_completed("clear finished") is True
    assert extractor.requests_clear_completed("Delete all the done todos") is True
    assert extractor.requests_clear_completed("delete Pay bills") is False
    assert extractor.requests_clear_completed("delete the report marked done") is False
