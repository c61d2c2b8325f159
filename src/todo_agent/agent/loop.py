"""Agent loop: resolve → extract → execute → synthesize."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, field, is_dataclass
from enum import Enum
from typing import Any

from ..errors import OperationError, StoreError
from ..logging import JSONLLogger
from ..store import Todo, now_ms
from ..tools import ClearArgs, ListArgs, TodoFilter, TodoIdArgs, ToolArgs, ToolRegistry
from . import responses
from .extractor import ArgumentExtractor
from .intents import Intent, IntentResolver
from .references import ReferenceResolver

logger = logging.getLogger(__name__)


class TurnState(Enum):
    """Where the agent is within a turn."""

    IDLE = "idle"
    RESOLVING = "resolving"
    EXTRACTING = "extracting"
    EXECUTING = "executing"
    SYNTHESIZING = "synthesizing"


class Role(Enum):
    USER = "user"
    AGENT = "agent"


@dataclass
class ToolCallRecord:
    """One tool invocation made during a turn."""

    tool_name: str
    args: dict[str, Any]
    result: Any = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"tool_name": self.tool_name, "args": self.args}
        if self.error is not None:
            data["error"] = self.error
        else:
            data["result"] = _plain(self.result)
        return data


@dataclass
class InteractionRecord:
    """A message in the session history."""

    role: Role
    content: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    timestamp: int = field(default_factory=now_ms)
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
    intent: Intent | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp,
        }
        if self.tool_calls:
            data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        return data


def _plain(value: Any) -> Any:
    """Tool results as plain JSON-friendly data."""
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value


Handler = Callable[[str, list[ToolCallRecord]], Awaitable[str]]


class TodoAgent:
    """Turns utterances into todo tool calls and replies.

    One utterance is processed to completion before the next is accepted.
    A turn never raises: failures become an error reply.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        intents: IntentResolver | None = None,
        extractor: ArgumentExtractor | None = None,
        references: ReferenceResolver | None = None,
        json_logger: JSONLLogger | None = None,
        chat_id: str | None = None,
    ) -> None:
        self.registry = registry
        self.intents = intents or IntentResolver()
        self.extractor = extractor or ArgumentExtractor()
        self.references = references or ReferenceResolver()
        self.json_logger = json_logger
        self.chat_id = chat_id
        self._state = TurnState.IDLE
        self._lock = asyncio.Lock()
        self._history: list[InteractionRecord] = []
        self._handlers: dict[Intent, Handler] = {
            Intent.LIST: self._handle_list,
            Intent.CREATE: self._handle_create,
            Intent.COMPLETE: self._handle_complete,
            Intent.DELETE: self._handle_delete,
            Intent.HELP: self._handle_help,
            Intent.UNRECOGNIZED: self._handle_unrecognized,
        }

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def history(self) -> tuple[InteractionRecord, ...]:
        """Interaction history of this session, oldest first."""
        return tuple(self._history)

    def list_operations(self) -> list[dict[str, Any]]:
        """Discovery entries for the available tools."""
        return self.registry.list_operations()

    def _enter(self, state: TurnState) -> None:
        logger.debug("Turn state %s -> %s", self._state.value, state.value)
        self._state = state

    def _log_event(self, method: str, *args: Any, **kwargs: Any) -> None:
        """Write to the event log. A failed write never affects the turn."""
        if self.json_logger is None:
            return
        try:
            getattr(self.json_logger, method)(*args, **kwargs)
        except OSError as e:
            logger.warning("Event log write failed (%s): %s", method, e)

    async def submit_utterance(self, utterance: str) -> InteractionRecord:
        """Process one utterance and return the agent's reply record."""
        async with self._lock:
            self._history.append(InteractionRecord(role=Role.USER, content=utterance))

            tool_calls: list[ToolCallRecord] = []
            intent = Intent.UNRECOGNIZED
            error: Exception | None = None
            content = ""
            start_time = time.time()

            try:
                self._enter(TurnState.RESOLVING)
                intent = self.intents.resolve(utterance)
                content = await self._handlers[intent](utterance, tool_calls)
            except OperationError as e:
                error = e
            except Exception as e:
                logger.exception("Unexpected failure handling utterance")
                error = StoreError(str(e) or type(e).__name__)

            if error is not None:
                self._enter(TurnState.SYNTHESIZING)
                content = responses.format_error(error)

            self._enter(TurnState.IDLE)

            record = InteractionRecord(
                role=Role.AGENT,
                content=content,
                tool_calls=tool_calls,
                intent=intent,
            )
            self._history.append(record)

            self._log_event(
                "log_turn",
                intent.value,
                len(tool_calls),
                chat_id=self.chat_id,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(error) if error else None,
            )

            return record

    async def _call(
        self, tool_name: str, args: ToolArgs, tool_calls: list[ToolCallRecord]
    ) -> Any:
        """Execute a tool and record the call."""
        self._enter(TurnState.EXECUTING)
        record = ToolCallRecord(tool_name=tool_name, args=args.to_dict())
        tool_calls.append(record)

        self._log_event("log_tool_call", tool_name, record.args, chat_id=self.chat_id)

        start_time = time.time()
        try:
            record.result = await self.registry.execute(tool_name, args)
        except Exception as e:
            record.error = str(e) or type(e).__name__
            raise
        finally:
            self._log_event(
                "log_tool_result",
                tool_name,
                record.success,
                chat_id=self.chat_id,
                duration_ms=(time.time() - start_time) * 1000,
                error=record.error,
            )

        return record.result

    async def _handle_list(self, utterance: str, tool_calls: list[ToolCallRecord]) -> str:
        self._enter(TurnState.EXTRACTING)
        args = self.extractor.list_args(utterance)
        todos: list[Todo] = await self._call("list_todos", args, tool_calls)
        self._enter(TurnState.SYNTHESIZING)
        return responses.format_list(todos, args.filter)

    async def _handle_create(self, utterance: str, tool_calls: list[ToolCallRecord]) -> str:
        self._enter(TurnState.EXTRACTING)
        args = self.extractor.create_args(utterance)
        if args is None:
            self._enter(TurnState.SYNTHESIZING)
            return responses.MISSING_TITLE

        todo: Todo = await self._call("create_todo", args, tool_calls)
        self._enter(TurnState.SYNTHESIZING)
        return responses.format_created(todo)

    async def _handle_complete(self, utterance: str, tool_calls: list[ToolCallRecord]) -> str:
        self._enter(TurnState.EXTRACTING)
        pending: list[Todo] = await self._call(
            "list_todos", ListArgs(filter=TodoFilter.PENDING), tool_calls
        )
        if not pending:
            self._enter(TurnState.SYNTHESIZING)
            return responses.NOTHING_TO_COMPLETE

        self._enter(TurnState.EXTRACTING)
        match = self.references.resolve(utterance, pending)
        if match is None:
            self._enter(TurnState.SYNTHESIZING)
            return responses.WHICH_TO_COMPLETE

        todo: Todo = await self._call("toggle_todo", TodoIdArgs(id=match.id), tool_calls)
        self._enter(TurnState.SYNTHESIZING)
        return responses.format_completed(todo)

    async def _handle_delete(self, utterance: str, tool_calls: list[ToolCallRecord]) -> str:
        self._enter(TurnState.EXTRACTING)
        if self.extractor.requests_clear_completed(utterance):
            result = await self._call("clear_completed", ClearArgs(), tool_calls)
            self._enter(TurnState.SYNTHESIZING)
            return responses.format_cleared(result["deleted_count"])

        todos: list[Todo] = await self._call(
            "list_todos", ListArgs(filter=TodoFilter.ALL), tool_calls
        )
        self._enter(TurnState.EXTRACTING)
        match = self.references.resolve(utterance, todos)
        if match is None:
            self._enter(TurnState.SYNTHESIZING)
            return responses.WHICH_TO_DELETE

        await self._call("delete_todo", TodoIdArgs(id=match.id), tool_calls)
        self._enter(TurnState.SYNTHESIZING)
        return responses.format_deleted(match)

    async def _handle_help(self, utterance: str, tool_calls: list[ToolCallRecord]) -> str:
        self._enter(TurnState.SYNTHESIZING)
        return responses.HELP_TEXT

    async def _handle_unrecognized(
        self, utterance: str, tool_calls: list[ToolCallRecord]
    ) -> str:
        self._enter(TurnState.SYNTHESIZING)
        return responses.FALLBACK_TEXT
