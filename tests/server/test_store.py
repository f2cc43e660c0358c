"""Tests for InMemoryTaskStore."""

import asyncio

import pytest

from taskagent.server.models import Message, Task, TaskState, TaskStatus, TextPart
from taskagent.server.store import InMemoryTaskStore, TaskStore


def _task(task_id: str = "t1", text: str = "hello") -> Task:
    return Task(
        id=task_id,
        session_id="s1",
        status=TaskStatus(state=TaskState.SUBMITTED),
        history=[Message(role="user", parts=[TextPart(text=text)])],
    )


class TestInMemoryTaskStore:
    def setup_method(self) -> None:
        self.store = InMemoryTaskStore()

    def test_satisfies_protocol(self) -> None:
        store: TaskStore = self.store
        assert store is self.store

    async def test_get_missing_returns_none(self) -> None:
        assert await self.store.get("nope") is None

    async def test_upsert_creates(self) -> None:
        stored = await self.store.upsert("t1", lambda current: current or _task())
        assert stored.id == "t1"
        assert await self.store.get("t1") == stored
        assert "t1" in self.store
        assert len(self.store) == 1

    async def test_mutation_receives_current_record(self) -> None:
        await self.store.upsert("t1", lambda _: _task(text="first"))
        seen: list[Task | None] = []

        def mutation(current: Task | None) -> Task:
            seen.append(current)
            assert current is not None
            return current.model_copy(update={"session_id": "s2"})

        updated = await self.store.upsert("t1", mutation)
        assert seen[0] is not None
        assert seen[0].history[0].text == "first"
        assert updated.session_id == "s2"

    async def test_failing_mutation_leaves_record_untouched(self) -> None:
        original = await self.store.upsert("t1", lambda _: _task())

        def boom(current: Task | None) -> Task:
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError):
            await self.store.upsert("t1", boom)
        assert await self.store.get("t1") == original

    async def test_mutation_returning_other_id_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="returned task"):
            await self.store.upsert("t1", lambda _: _task("t2"))
        assert await self.store.get("t1") is None

    async def test_async_mutation(self) -> None:
        async def mutation(current: Task | None) -> Task:
            await asyncio.sleep(0)
            return _task()

        stored = await self.store.upsert("t1", mutation)
        assert stored.id == "t1"

    async def test_concurrent_mutations_on_same_id_do_not_lose_updates(self) -> None:
        await self.store.upsert("t1", lambda _: _task(text="0"))

        async def append(n: int) -> None:
            async def mutation(current: Task | None) -> Task:
                assert current is not None
                # Yield inside the critical section to invite interleaving.
                await asyncio.sleep(0)
                message = Message(role="user", parts=[TextPart(text=str(n))])
                return current.model_copy(update={"history": [*current.history, message]})

            await self.store.upsert("t1", mutation)

        await asyncio.gather(*[append(n) for n in range(1, 11)])
        stored = await self.store.get("t1")
        assert stored is not None
        assert len(stored.history) == 11
        assert sorted(int(m.text) for m in stored.history) == list(range(11))

    async def test_get_returns_pre_or_post_value_during_mutation(self) -> None:
        await self.store.upsert("t1", lambda _: _task(text="before"))
        entered = asyncio.Event()
        release = asyncio.Event()

        async def slow(current: Task | None) -> Task:
            assert current is not None
            entered.set()
            await release.wait()
            return _task(text="after")

        pending = asyncio.create_task(self.store.upsert("t1", slow))
        await entered.wait()
        during = await self.store.get("t1")
        assert during is not None
        assert during.history[0].text == "before"
        release.set()
        await pending
        after = await self.store.get("t1")
        assert after is not None
        assert after.history[0].text == "after"
