"""Tests for InMemoryTodoStore."""

import pytest

from todo_agent.errors import StoreError
from todo_agent.store import InMemoryTodoStore, Todo


def make_todo(todo_id: str = "t1", title: str = "Buy milk", **kwargs) -> Todo:
    return Todo(id=todo_id, title=title, created_at=1000, updated_at=1000, **kwargs)


@pytest.fixture
def store() -> InMemoryTodoStore:
    return InMemoryTodoStore()


@pytest.mark.asyncio
async def test_insert_and_get(store: InMemoryTodoStore) -> None:
    todo_id = await store.insert(make_todo())
    assert todo_id == "t1"

    fetched = await store.get_by_id("t1")
    assert fetched is not None
    assert fetched.title == "Buy milk"


@pytest.mark.asyncio
async def test_insert_duplicate_raises(store: InMemoryTodoStore) -> None:
    await store.insert(make_todo())
    with pytest.raises(StoreError, match="already exists"):
        await store.insert(make_todo())


@pytest.mark.asyncio
async def test_get_missing_returns_none(store: InMemoryTodoStore) -> None:
    assert await store.get_by_id("nope") is None


@pytest.mark.asyncio
async def test_get_all_keeps_insertion_order(store: InMemoryTodoStore) -> None:
    await store.insert(make_todo("a", "First"))
    await store.insert(make_todo("b", "Second"))
    todos = await store.get_all()
    assert [t.id for t in todos] == ["a", "b"]


@pytest.mark.asyncio
async def test_put_overwrites(store: InMemoryTodoStore) -> None:
    await store.insert(make_todo())
    await store.put(make_todo(title="Buy oat milk", completed=True))
    fetched = await store.get_by_id("t1")
    assert fetched.title == "Buy oat milk"
    assert fetched.completed is True


@pytest.mark.asyncio
async def test_returned_records_are_copies(store: InMemoryTodoStore) -> None:
    await store.insert(make_todo(tags=["home"]))
    fetched = await store.get_by_id("t1")
    fetched.tags.append("mutated")
    fetched.title = "changed"

    again = await store.get_by_id("t1")
    assert again.tags == ["home"]
    assert again.title == "Buy milk"


@pytest.mark.asyncio
async def test_delete_is_noop_when_absent(store: InMemoryTodoStore) -> None:
    await store.insert(make_todo())
    await store.delete_by_id("missing")
    await store.delete_by_id("t1")
    assert await store.get_all() == []


@pytest.mark.asyncio
async def test_clear(store: InMemoryTodoStore) -> None:
    await store.insert(make_todo("a"))
    await store.insert(make_todo("b"))
    await store.clear()
    assert len(store) == 0
