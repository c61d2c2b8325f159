"""Telegram bot front-end for the todo agent."""

import logging

from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from ..agent import InteractionRecord
from ..agent.responses import GREETING, HELP_TEXT
from ..config import AgentConfig, load_config
from ..errors import StoreError
from ..logging import JSONLLogger, configure_logger
from ..session import SessionConfig, SessionManager
from ..store import TodoStore, open_store
from ..tools import build_registry

logger = logging.getLogger(__name__)


WELCOME_MESSAGE = f"""✅ Todo Agent

{GREETING}

Commands:
/start - Show this message
/help - What I can do
/tools - List available operations
/reset - Start a new session (clears history)
"""

MAX_MESSAGE_LENGTH = 4096


def truncate_message(text: str, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """Truncate message to fit Telegram limits."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 20] + "\n... [truncated]"


def format_response(record: InteractionRecord) -> str:
    """Format an agent reply for Telegram."""
    text = record.content

    failed = [tc for tc in record.tool_calls if not tc.success]
    if failed:
        text += f"\n\n⚠️ {failed[-1].tool_name} failed"

    return truncate_message(text)


def format_tools(operations: list[dict]) -> str:
    """List operations as plain text."""
    lines = ["Available operations:"]
    for op in operations:
        lines.append(f"• {op['name']}: {op['description']}")
    return "\n".join(lines)


class TelegramBot:
    """Telegram bot for the todo agent. One session per chat."""

    def __init__(
        self,
        token: str | None,
        store: TodoStore,
        session_config: SessionConfig | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        if not token:
            raise ValueError("TELEGRAM_TOKEN not set")
        self.token = token
        self.store = store
        self.registry = build_registry(store)
        self.json_logger = json_logger
        self.sessions = SessionManager(self.registry, session_config, json_logger=json_logger)
        self._app: Application | None = None

    def _get_chat_id(self, update: Update) -> str:
        """Get chat_id as string from update."""
        assert update.effective_chat is not None
        return str(update.effective_chat.id)

    def _log(self, event: str, chat_id: str, **extra: object) -> None:
        if self.json_logger:
            self.json_logger.log(event, chat_id=chat_id, **extra)

    async def _handle_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start command."""
        assert update.message is not None
        chat_id = self._get_chat_id(update)
        self._log("telegram_start", chat_id)
        await update.message.reply_text(WELCOME_MESSAGE)

    async def _handle_help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /help command."""
        assert update.message is not None
        await update.message.reply_text(HELP_TEXT)

    async def _handle_tools(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /tools command."""
        assert update.message is not None
        await update.message.reply_text(format_tools(self.registry.list_operations()))

    async def _handle_reset(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /reset command."""
        assert update.message is not None
        chat_id = self._get_chat_id(update)
        self.sessions.destroy_session(chat_id)
        self._log("telegram_reset", chat_id)
        await update.message.reply_text("✨ Session reset. History cleared.")

    async def _handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle incoming messages."""
        assert update.message is not None
        assert update.message.text is not None

        chat_id = self._get_chat_id(update)
        message = update.message.text

        acquired, error = self.sessions.acquire(chat_id)
        if not acquired:
            await update.message.reply_text(error or "Busy")
            return

        try:
            self._log("telegram_message", chat_id, message_length=len(message))
            await update.message.chat.send_action("typing")

            session = self.sessions.get_session(chat_id)
            record = await session.agent.submit_utterance(message)

            await update.message.reply_text(format_response(record))

        except Exception as e:
            logger.exception("Error processing message")
            self._log("telegram_error", chat_id, error=str(e))
            await update.message.reply_text(f"❌ Error: {e}")

        finally:
            self.sessions.release(chat_id)

    async def _post_init(self, application: Application) -> None:
        """Called after Application.initialize()."""
        self.sessions.start_cleanup_task()

    async def _post_shutdown(self, application: Application) -> None:
        """Called after Application.shutdown()."""
        self.sessions.stop_cleanup_task()
        self.store.close()

    def build_app(self) -> Application:
        """Build the Telegram application."""
        self._app = (
            Application.builder()
            .token(self.token)
            .post_init(self._post_init)
            .post_shutdown(self._post_shutdown)
            .build()
        )

        self._app.add_handler(CommandHandler("start", self._handle_start))
        self._app.add_handler(CommandHandler("help", self._handle_help))
        self._app.add_handler(CommandHandler("tools", self._handle_tools))
        self._app.add_handler(CommandHandler("reset", self._handle_reset))
        self._app.add_handler(
            MessageHandler(filters.TEXT & ~filters.COMMAND, self._handle_message)
        )

        return self._app

    def run(self) -> None:
        """Run the bot (blocking)."""
        app = self.build_app()
        logger.info("Starting Telegram bot...")
        app.run_polling()


def run_telegram_bot(config: AgentConfig | None = None) -> None:
    """Run the Telegram bot with configuration from the environment."""
    config = config or load_config()
    json_logger = configure_logger(config.log_dir, max_size_mb=config.log_max_size_mb)

    if not config.telegram_token:
        print("❌ Error: TELEGRAM_TOKEN environment variable not set")
        return

    try:
        store = open_store(config)
    except StoreError as e:
        logger.error("Store initialization failed: %s", e)
        print(f"❌ Error: could not open the todo store: {e}")
        return

    bot = TelegramBot(token=config.telegram_token, store=store, json_logger=json_logger)
    bot.run()
