"""Task storage.

:class:`TaskStore` defines the async storage protocol.
:class:`InMemoryTaskStore` keeps tasks in a dict for the lifetime of the
process. Tasks are never evicted.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol

from taskagent.server.models import Task

Mutation = Callable[[Task | None], Task | Awaitable[Task]]


class TaskStore(Protocol):
    """Async storage protocol for :class:`Task` records."""

    async def get(self, task_id: str) -> Task | None:
        """Return the current record, or ``None`` if the id was never stored."""
        ...

    async def upsert(self, task_id: str, mutation: Mutation) -> Task:
        """Atomically replace the record with ``mutation(current)``.

        ``current`` is ``None`` for an unseen id. If the mutation raises, the
        stored record is left untouched and the error propagates.
        """
        ...


class InMemoryTaskStore:
    """Dict-backed :class:`TaskStore` with one lock per task id.

    Records are immutable, so readers never need the lock: they observe
    either the record before a mutation or the one after it.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock(self, task_id: str) -> asyncio.Lock:
        return self._locks.setdefault(task_id, asyncio.Lock())

    async def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    async def upsert(self, task_id: str, mutation: Mutation) -> Task:
        async with self._lock(task_id):
            current = self._tasks.get(task_id)
            updated = mutation(current)
            if inspect.isawaitable(updated):
                updated = await updated
            if updated.id != task_id:
                msg = f"mutation for {task_id!r} returned task {updated.id!r}"
                raise ValueError(msg)
            self._tasks[task_id] = updated
            return updated

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks
