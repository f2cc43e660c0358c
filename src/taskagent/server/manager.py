"""TaskManager — the ``tasks/*`` method handlers.

Owns the lifecycle of a ``tasks/send`` call: accept the message and flip
the task to ``working`` under the store's per-id lock, run the agent with no
lock held, then commit ``completed`` or ``failed`` under the lock again.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from taskagent.core.agent.errors import AgentError, AgentTimeoutError
from taskagent.core.interface.models import CanonicalMessage, TextContent
from taskagent.server import state
from taskagent.server.errors import (
    InternalError,
    TaskNotFoundError,
    UnsupportedOperationError,
)
from taskagent.server.models import (
    DataPart,
    GetTaskResult,
    Message,
    Part,
    SendTaskResult,
    Task,
    TaskIdParams,
    TaskQueryParams,
    TaskSendParams,
    TextPart,
)
from taskagent.server.store import InMemoryTaskStore, TaskStore
from taskagent.utils.telemetry import ATTR_TASK_ID, ATTR_TASK_STATE, get_tracer

if TYPE_CHECKING:
    from collections.abc import Callable

    from taskagent.core.agent.agent import AgentCapability
    from taskagent.core.agent.models import AgentResult, AgentStep

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class TaskManager:
    """Handles ``tasks/send`` and ``tasks/get`` against a :class:`TaskStore`.

    Args:
        agent: The capability that produces answers.
        store: Task storage; defaults to a fresh :class:`InMemoryTaskStore`.
        adapter_timeout: Seconds to wait for the agent before failing the
            task. ``None`` waits indefinitely.
        artifact_name: Name given to the answer artifact.
        artifact_description: Description given to the answer artifact.
    """

    def __init__(
        self,
        agent: AgentCapability,
        store: TaskStore | None = None,
        *,
        adapter_timeout: float | None = None,
        artifact_name: str | None = None,
        artifact_description: str | None = None,
    ) -> None:
        self.agent = agent
        self.store: TaskStore = store if store is not None else InMemoryTaskStore()
        self.adapter_timeout = adapter_timeout
        self.artifact_name = artifact_name
        self.artifact_description = artifact_description

    async def on_send_task(self, params: TaskSendParams) -> SendTaskResult:
        task_id = params.id
        with _tracer.start_as_current_span("task.send") as span:
            span.set_attribute(ATTR_TASK_ID, task_id)

            task = await self.store.upsert(
                task_id, lambda current: state.accept_message(current, task_id, params.message)
            )
            logger.info(
                "Task %s accepted (session %s, %d messages)",
                task_id,
                task.session_id,
                len(task.history),
            )

            try:
                result = await self._run_agent(params.message)
            except AgentError as exc:
                logger.warning("Task %s failed: %s", task_id, exc)
                reason = str(exc)
                task = await self._finish(task_id, lambda t: state.fail(t, reason))
            except Exception as exc:
                logger.exception("Task %s crashed in the agent", task_id)
                await self._finish(task_id, lambda t: state.fail(t, "Internal error"))
                raise InternalError(data={"id": task_id}) from exc
            else:
                steps = [_step_message(step) for step in result.steps]
                task = await self._finish(
                    task_id,
                    lambda t: state.complete(
                        t,
                        result.text,
                        steps,
                        artifact_name=self.artifact_name,
                        artifact_description=self.artifact_description,
                    ),
                )

            span.set_attribute(ATTR_TASK_STATE, task.status.state.value)
            logger.info("Task %s is %s", task_id, task.status.state.value)
            return SendTaskResult(
                id=task.id,
                session_id=task.session_id,
                status=task.status.state,
                artifacts=task.artifacts,
            )

    async def on_get_task(self, params: TaskQueryParams) -> GetTaskResult:
        task = await self.store.get(params.id)
        if task is None:
            raise TaskNotFoundError(params.id)
        history = task.history[-params.history_length :] if params.history_length else None
        return GetTaskResult(
            id=task.id,
            session_id=task.session_id,
            status=task.status,
            artifacts=task.artifacts,
            history=history,
        )

    async def on_cancel_task(self, params: TaskIdParams) -> None:
        raise UnsupportedOperationError("tasks/cancel")

    async def on_send_task_subscribe(self, params: TaskSendParams) -> None:
        raise UnsupportedOperationError("tasks/sendSubscribe")

    async def _run_agent(self, message: Message) -> AgentResult:
        call = self.agent.run(_to_canonical(message))
        if self.adapter_timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self.adapter_timeout)
        except asyncio.TimeoutError as exc:
            raise AgentTimeoutError(self.adapter_timeout) from exc

    async def _finish(self, task_id: str, finisher: Callable[[Task], Task]) -> Task:
        """Apply the final transition unless another send already closed the task."""

        def mutation(current: Task | None) -> Task:
            if current is None:
                msg = f"task {task_id} disappeared while working"
                raise InternalError(msg)
            if state.is_terminal(current.status.state):
                logger.info(
                    "Task %s already %s; dropping this result",
                    task_id,
                    current.status.state.value,
                )
                return current
            return finisher(current)

        return await self.store.upsert(task_id, mutation)


def _to_canonical(message: Message) -> list[CanonicalMessage]:
    """One model message per part; only text parts carry content."""
    role = "user" if message.role == "user" else "assistant"
    return [
        CanonicalMessage(
            role=role,
            content=[TextContent(text=part.text if isinstance(part, TextPart) else "")],
        )
        for part in message.parts
    ]


def _step_message(step: AgentStep) -> Message:
    parts: list[Part] = [TextPart(text=step.text)]
    if step.tool_calls:
        parts.append(
            DataPart(
                data={
                    "toolCalls": [call.model_dump() for call in step.tool_calls],
                    "toolResults": [
                        {"toolCallId": r.tool_call_id, "text": r.text, "isError": r.is_error}
                        for r in step.tool_results
                    ],
                }
            )
        )
    return Message(role="agent", parts=parts)
