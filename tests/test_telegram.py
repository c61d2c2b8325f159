"""Tests for Telegram bot."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from todo_agent.agent import InteractionRecord, Role, ToolCallRecord
from todo_agent.config import AgentConfig
from todo_agent.logging import JSONLLogger
from todo_agent.store import InMemoryTodoStore
from todo_agent.telegram.bot import (
    MAX_MESSAGE_LENGTH,
    WELCOME_MESSAGE,
    TelegramBot,
    format_response,
    format_tools,
    run_telegram_bot,
    truncate_message,
)


class TestTruncateMessage:
    def test_short_message_unchanged(self):
        text = "Short message"
        assert truncate_message(text) == text

    def test_long_message_truncated(self):
        text = "x" * 5000
        result = truncate_message(text)
        assert len(result) <= MAX_MESSAGE_LENGTH
        assert result.endswith("[truncated]")


class TestFormatResponse:
    def test_plain_reply(self):
        record = InteractionRecord(role=Role.AGENT, content="No todos found.")
        assert format_response(record) == "No todos found."

    def test_failed_call_noted(self):
        record = InteractionRecord(
            role=Role.AGENT,
            content="Error: boom",
            tool_calls=[ToolCallRecord(tool_name="delete_todo", args={}, error="boom")],
        )
        assert format_response(record).endswith("⚠️ delete_todo failed")


def test_format_tools():
    text = format_tools([{"name": "list_todos", "description": "Get all todo items."}])
    assert text == "Available operations:\n• list_todos: Get all todo items."


def test_requires_token():
    with pytest.raises(ValueError, match="TELEGRAM_TOKEN"):
        TelegramBot(token=None, store=InMemoryTodoStore())


def make_update(chat_id: int = 42, text: str | None = None) -> MagicMock:
    update = MagicMock()
    update.effective_chat.id = chat_id
    update.message.text = text
    update.message.reply_text = AsyncMock()
    update.message.chat.send_action = AsyncMock()
    return update


@pytest.fixture
def bot(tmp_path) -> TelegramBot:
    return TelegramBot(
        token="test-token",
        store=InMemoryTodoStore(),
        json_logger=JSONLLogger(log_dir=tmp_path),
    )


class TestHandlers:
    @pytest.mark.asyncio
    async def test_start(self, bot: TelegramBot):
        update = make_update()
        await bot._handle_start(update, MagicMock())
        update.message.reply_text.assert_awaited_once_with(WELCOME_MESSAGE)

    @pytest.mark.asyncio
    async def test_message_runs_agent(self, bot: TelegramBot):
        update = make_update(text="Add a todo: Buy milk")
        await bot._handle_message(update, MagicMock())

        update.message.reply_text.assert_awaited_once_with('Created todo: "Buy milk"')
        assert bot.sessions.is_busy("42") is False

    @pytest.mark.asyncio
    async def test_busy_chat_gets_busy_message(self, bot: TelegramBot):
        bot.sessions.acquire("42")
        update = make_update(text="list todos")

        await bot._handle_message(update, MagicMock())

        update.message.reply_text.assert_awaited_once_with(bot.sessions.BUSY_MESSAGE)

    @pytest.mark.asyncio
    async def test_reset_forgets_history(self, bot: TelegramBot):
        await bot._handle_message(make_update(text="help"), MagicMock())
        assert len(bot.sessions.get_session("42").agent.history) == 2

        await bot._handle_reset(make_update(), MagicMock())
        assert bot.sessions.get_session("42").agent.history == ()

    @pytest.mark.asyncio
    async def test_tools(self, bot: TelegramBot):
        update = make_update()
        await bot._handle_tools(update, MagicMock())
        text = update.message.reply_text.await_args.args[0]
        assert "create_todo" in text
        assert "clear_completed" in text


class TestRunTelegramBot:
    def test_store_failure_is_reported(self, tmp_path, capsys):
        # A directory cannot be opened as a SQLite database.
        config = AgentConfig(db_path=tmp_path, log_dir=tmp_path / "logs", telegram_token="t")

        with patch("todo_agent.telegram.bot.TelegramBot") as bot_cls:
            run_telegram_bot(config)

        bot_cls.assert_not_called()
        assert "could not open the todo store" in capsys.readouterr().out

    def test_missing_token_is_reported(self, tmp_path, capsys):
        config = AgentConfig(store_backend="memory", log_dir=tmp_path / "logs")

        with patch("todo_agent.telegram.bot.TelegramBot") as bot_cls:
            run_telegram_bot(config)

        bot_cls.assert_not_called()
        assert "TELEGRAM_TOKEN" in capsys.readouterr().out

    def test_runs_bot_with_memory_store(self, tmp_path):
        config = AgentConfig(store_backend="memory", log_dir=tmp_path / "logs", telegram_token="t")

        with patch("todo_agent.telegram.bot.TelegramBot") as bot_cls:
            run_telegram_bot(config)

        bot_cls.return_value.run.assert_called_once_with()
