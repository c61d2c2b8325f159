"""Tests for session manager."""

import asyncio
import time

import pytest

from todo_agent.agent import TodoAgent
from todo_agent.session import SessionConfig, SessionManager, SessionState
from todo_agent.store import InMemoryTodoStore
from todo_agent.tools import build_registry


@pytest.fixture
def registry():
    return build_registry(InMemoryTodoStore())


@pytest.fixture
def session_manager(registry) -> SessionManager:
    return SessionManager(registry, SessionConfig(ttl_seconds=1.0))


class TestSessionState:
    def test_create(self, registry):
        state = SessionState(chat_id="test-123", agent=TodoAgent(registry))
        assert state.chat_id == "test-123"
        assert state.agent.history == ()

    def test_touch_updates_activity(self, registry):
        state = SessionState(chat_id="test", agent=TodoAgent(registry))
        old_time = state.last_activity
        time.sleep(0.01)
        state.touch()
        assert state.last_activity > old_time

    def test_is_expired(self, registry):
        state = SessionState(chat_id="test", agent=TodoAgent(registry))
        state.last_activity = time.time() - 100
        assert state.is_expired(ttl_seconds=50) is True
        assert state.is_expired(ttl_seconds=200) is False


class TestSessionManager:
    def test_get_session_creates_new(self, session_manager: SessionManager):
        session = session_manager.get_session("new-chat")
        assert session.chat_id == "new-chat"
        assert session.agent.chat_id == "new-chat"

    def test_get_session_returns_same(self, session_manager: SessionManager):
        s1 = session_manager.get_session("chat")
        s2 = session_manager.get_session("chat")
        assert s1 is s2

    def test_sessions_share_the_store(self, session_manager: SessionManager):
        a = session_manager.get_session("a").agent
        b = session_manager.get_session("b").agent
        assert a is not b
        assert a.registry is b.registry

    @pytest.mark.asyncio
    async def test_histories_are_separate(self, session_manager: SessionManager):
        await session_manager.get_session("a").agent.submit_utterance("Add a todo: Buy milk")

        assert len(session_manager.get_session("a").agent.history) == 2
        assert session_manager.get_session("b").agent.history == ()

    @pytest.mark.asyncio
    async def test_todos_visible_across_sessions(self, session_manager: SessionManager):
        await session_manager.get_session("a").agent.submit_utterance("Add a todo: Buy milk")
        record = await session_manager.get_session("b").agent.submit_utterance("list todos")
        assert "Buy milk" in record.content

    def test_destroy_session_drops_history(self, session_manager: SessionManager):
        first = session_manager.get_session("chat")
        session_manager.destroy_session("chat")
        assert session_manager.get_session("chat") is not first


class TestBusyState:
    def test_acquire_release(self, session_manager: SessionManager):
        acquired, error = session_manager.acquire("chat")
        assert acquired is True
        assert error is None
        assert session_manager.is_busy("chat") is True

        session_manager.release("chat")
        assert session_manager.is_busy("chat") is False

    def test_acquire_when_busy(self, session_manager: SessionManager):
        session_manager.acquire("chat")

        acquired, error = session_manager.acquire("chat")
        assert acquired is False
        assert error == SessionManager.BUSY_MESSAGE

    def test_other_chats_not_blocked(self, session_manager: SessionManager):
        session_manager.acquire("chat-1")
        acquired, _ = session_manager.acquire("chat-2")
        assert acquired is True


class TestCleanup:
    @pytest.mark.asyncio
    async def test_cleanup_expired(self, session_manager: SessionManager):
        session_manager.get_session("old").last_activity = time.time() - 10
        session_manager.get_session("fresh")

        cleaned = await session_manager.cleanup_expired()

        assert cleaned == 1
        assert "old" not in session_manager._sessions
        assert "fresh" in session_manager._sessions

    @pytest.mark.asyncio
    async def test_cleanup_skips_busy(self, session_manager: SessionManager):
        session_manager.acquire("busy")
        session_manager.get_session("busy").last_activity = time.time() - 10

        assert await session_manager.cleanup_expired() == 0

    @pytest.mark.asyncio
    async def test_cleanup_task_lifecycle(self, registry):
        manager = SessionManager(registry, SessionConfig(ttl_seconds=0.01, cleanup_interval=0.01))
        manager.get_session("chat")

        manager.start_cleanup_task()
        await asyncio.sleep(0.1)
        manager.stop_cleanup_task()

        assert "chat" not in manager._sessions
