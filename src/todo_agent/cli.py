"""CLI interface for the todo agent."""

import logging
import uuid

from .agent import InteractionRecord, TodoAgent
from .agent.responses import GREETING, pluralize
from .config import AgentConfig, load_config
from .errors import StoreError
from .logging import JSONLLogger, configure_logger, get_logger
from .store import TodoStore, open_store
from .tools import ToolRegistry, build_registry

logger = logging.getLogger(__name__)


BANNER = """
╔══════════════════════════════════════════╗
║            ✅ Todo Agent v0.1.0           ║
║   Manage your todos in plain language    ║
╚══════════════════════════════════════════╝

Commands:
  /exit, /quit    - Exit the CLI
  /reset          - Start a new session (clears history)
  /tools          - List available operations
  /history        - Show this session's messages
  /wipe confirm   - Delete ALL todos
  /help           - Show this help

Type your message and press Enter.
"""


class CLI:
    """Interactive command-line interface for the todo agent."""

    def __init__(
        self,
        store: TodoStore,
        registry: ToolRegistry | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.store = store
        self.registry = registry or build_registry(store)
        self.chat_id = self._new_chat_id()
        self.agent: TodoAgent | None = None
        self.logger = json_logger or get_logger()

    def _new_chat_id(self) -> str:
        """Generate a new chat ID."""
        return f"cli-{uuid.uuid4().hex[:8]}"

    def _init_agent(self) -> None:
        """Initialize or reinitialize the agent."""
        self.agent = TodoAgent(self.registry, json_logger=self.logger, chat_id=self.chat_id)
        self.logger.set_chat_id(self.chat_id)
        self.logger.log("session_start", chat_id=self.chat_id)

    def _reset(self) -> None:
        """Reset the session and drop its history."""
        old_chat_id = self.chat_id
        self.chat_id = self._new_chat_id()
        self._init_agent()
        self.logger.log("session_reset", old_chat_id=old_chat_id, chat_id=self.chat_id)
        print(f"\n✓ Session reset. New chat_id: {self.chat_id}")

    def _format_response(self, record: InteractionRecord) -> str:
        """Format the agent's reply for display."""
        output = ["\n" + "─" * 40]
        output.append(record.content)
        output.append("─" * 40)

        if record.tool_calls:
            calls = ", ".join(
                tc.tool_name if tc.success else f"{tc.tool_name} ✗" for tc in record.tool_calls
            )
            output.append(f"🔧 {pluralize(len(record.tool_calls), 'tool call')}: {calls}")

        return "\n".join(output)

    def _format_tools(self) -> str:
        lines = ["Available operations:"]
        for op in self.registry.list_operations():
            params = op["input_schema"].get("properties", {})
            required = set(op["input_schema"].get("required", []))
            args = ", ".join(f"{name}{'' if name in required else '?'}" for name in params)
            lines.append(f"  {op['name']}({args}) - {op['description']}")
        return "\n".join(lines)

    def _format_history(self) -> str:
        if self.agent is None or not self.agent.history:
            return "No messages yet."
        lines = []
        for record in self.agent.history:
            speaker = "you" if record.role.value == "user" else "agent"
            first_line = record.content.splitlines()[0] if record.content else ""
            lines.append(f"{speaker}> {first_line}")
        return "\n".join(lines)

    async def _wipe(self, args: list[str]) -> None:
        if args != ["confirm"]:
            print("This deletes every todo. Type '/wipe confirm' to proceed.")
            return
        await self.store.clear()
        self.logger.log("store_wiped", chat_id=self.chat_id)
        print("🗑  All todos deleted.")

    async def _handle_command(self, command: str) -> bool:
        """Handle special commands. Returns False if should exit."""
        parts = command.strip().split()
        cmd = parts[0].lower() if parts else ""
        args = parts[1:]

        if cmd in ("/exit", "/quit", "exit", "quit"):
            print("\n👋 Goodbye!")
            return False

        if cmd == "/reset":
            self._reset()
            return True

        if cmd == "/help":
            print(BANNER)
            return True

        if cmd == "/tools":
            print(self._format_tools())
            return True

        if cmd == "/history":
            print(self._format_history())
            return True

        if cmd == "/wipe":
            await self._wipe(args)
            return True

        print(f"Unknown command: {cmd}")
        return True

    async def _process_message(self, message: str) -> None:
        """Process a user message through the agent."""
        if self.agent is None:
            self._init_agent()

        assert self.agent is not None

        record = await self.agent.submit_utterance(message)
        print(self._format_response(record))

    async def run(self) -> None:
        """Run the interactive CLI."""
        print(BANNER)
        print(f"Session: {self.chat_id}\n")
        print(GREETING + "\n")

        self._init_agent()

        try:
            while True:
                try:
                    user_input = input("you> ").strip()

                    if not user_input:
                        continue

                    if user_input.startswith("/") or user_input.lower() in ("exit", "quit"):
                        if not await self._handle_command(user_input):
                            break
                        continue

                    await self._process_message(user_input)

                except KeyboardInterrupt:
                    print("\n\n⚡ Interrupted")
                    self.logger.log("session_interrupt", chat_id=self.chat_id)
                    break

                except EOFError:
                    print("\n👋 Goodbye!")
                    break
        finally:
            self.logger.log("session_end", chat_id=self.chat_id)
            self.store.close()


async def run_cli(config: AgentConfig | None = None) -> None:
    """Run the CLI with configuration from the environment."""
    config = config or load_config()
    configure_logger(config.log_dir, max_size_mb=config.log_max_size_mb)

    try:
        store = open_store(config)
    except StoreError as e:
        logger.error("Store initialization failed: %s", e)
        print(f"❌ Error: could not open the todo store: {e}")
        return

    cli = CLI(store)
    await cli.run()
