"""Session manager for per-chat agents and concurrency control."""

import asyncio
import logging
import time
from dataclasses import dataclass, field

from ..agent import TodoAgent
from ..logging import JSONLLogger
from ..tools import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """State for a single session.

    History lives on the agent and is never written to disk.
    """

    chat_id: str
    agent: TodoAgent
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)

    def touch(self) -> None:
        """Update last activity timestamp."""
        self.last_activity = time.time()

    def is_expired(self, ttl_seconds: float) -> bool:
        """Check if session has expired based on TTL."""
        return (time.time() - self.last_activity) > ttl_seconds


@dataclass
class SessionConfig:
    """Configuration for session manager."""

    ttl_seconds: float = 3600  # 1 hour
    cleanup_interval: float = 300  # 5 minutes


class SessionManager:
    """Manages per-chat agents, busy flags and lifecycle."""

    BUSY_MESSAGE = "⏳ Still working on your last request. Please wait for it to finish."

    def __init__(
        self,
        registry: ToolRegistry,
        config: SessionConfig | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.registry = registry
        self.config = config or SessionConfig()
        self.json_logger = json_logger
        self._sessions: dict[str, SessionState] = {}
        self._busy: set[str] = set()
        self._cleanup_task: asyncio.Task | None = None

    def get_session(self, chat_id: str) -> SessionState:
        """Get or create a session for chat_id."""
        if chat_id not in self._sessions:
            agent = TodoAgent(self.registry, json_logger=self.json_logger, chat_id=chat_id)
            self._sessions[chat_id] = SessionState(chat_id=chat_id, agent=agent)
            logger.debug("Session created chat_id=%s", chat_id)

        return self._sessions[chat_id]

    def is_busy(self, chat_id: str) -> bool:
        """Check if a session is currently processing a request."""
        return chat_id in self._busy

    def acquire(self, chat_id: str) -> tuple[bool, str | None]:
        """Try to acquire the session for processing.

        Returns (acquired, error_message).
        If busy, returns (False, busy_message).
        """
        session = self.get_session(chat_id)
        if self.is_busy(chat_id) or session.agent.busy:
            return False, self.BUSY_MESSAGE

        self._busy.add(chat_id)
        session.touch()
        return True, None

    def release(self, chat_id: str) -> None:
        """Release the session after processing."""
        self._busy.discard(chat_id)

    def destroy_session(self, chat_id: str) -> None:
        """Forget a session and its history."""
        self._sessions.pop(chat_id, None)
        self._busy.discard(chat_id)

    async def cleanup_expired(self) -> int:
        """Clean up expired sessions. Returns count of cleaned sessions."""
        count = 0
        chat_ids = list(self._sessions.keys())

        for chat_id in chat_ids:
            session = self._sessions.get(chat_id)
            if session and not self.is_busy(chat_id) and session.is_expired(self.config.ttl_seconds):
                self.destroy_session(chat_id)
                count += 1

        return count

    async def _cleanup_loop(self) -> None:
        """Background task for periodic cleanup."""
        while True:
            try:
                await asyncio.sleep(self.config.cleanup_interval)
                cleaned = await self.cleanup_expired()
                if cleaned:
                    logger.info("Cleaned up %s expired session(s)", cleaned)
            except asyncio.CancelledError:
                break

    def start_cleanup_task(self) -> None:
        """Start the background cleanup task."""
        if self._cleanup_task is None or self._cleanup_task.done():
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    def stop_cleanup_task(self) -> None:
        """Stop the background cleanup task."""
        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()
