"""Task state machine.

Legal transitions::

    submitted ──> working ──> completed | failed | canceled
        │           │  ^
        │           v  │
        │       input-required ──> completed | failed | canceled
        └──> failed | canceled

``working -> working`` is allowed: a follow-up message on a running task
restarts work with a fresh timestamp. ``unknown`` is reserved and never
produced here. Every function takes a :class:`Task` and returns a new one.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from taskagent.server.errors import InvalidStateTransitionError, TaskAlreadyCompletedError
from taskagent.server.models import (
    Artifact,
    Message,
    Task,
    TaskState,
    TaskStatus,
    TextPart,
    utc_now,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

TERMINAL_STATES = frozenset({TaskState.COMPLETED, TaskState.CANCELED, TaskState.FAILED})

_TRANSITIONS: dict[TaskState, frozenset[TaskState]] = {
    TaskState.SUBMITTED: frozenset({TaskState.WORKING, TaskState.CANCELED, TaskState.FAILED}),
    TaskState.WORKING: frozenset(
        {
            TaskState.WORKING,
            TaskState.INPUT_REQUIRED,
            TaskState.COMPLETED,
            TaskState.CANCELED,
            TaskState.FAILED,
        }
    ),
    TaskState.INPUT_REQUIRED: frozenset(
        {TaskState.WORKING, TaskState.COMPLETED, TaskState.CANCELED, TaskState.FAILED}
    ),
}


def is_terminal(state: TaskState) -> bool:
    return state in TERMINAL_STATES


def can_transition(current: TaskState, target: TaskState) -> bool:
    return target in _TRANSITIONS.get(current, frozenset())


def _timestamp_after(previous: str) -> str:
    # Fixed-width UTC ISO strings compare chronologically.
    now = utc_now()
    return now if now >= previous else previous


def transition(task: Task, target: TaskState, message: Message | None = None) -> Task:
    """Move *task* to *target*, replacing the status message with *message*."""
    current = task.status.state
    if not can_transition(current, target):
        raise InvalidStateTransitionError(current.value, target.value)
    status = TaskStatus(
        state=target,
        message=message,
        timestamp=_timestamp_after(task.status.timestamp),
    )
    return task.model_copy(update={"status": status})


def new_task(task_id: str, message: Message) -> Task:
    """A freshly submitted task whose history starts with *message*."""
    return Task(
        id=task_id,
        session_id=uuid.uuid4().hex,
        status=TaskStatus(state=TaskState.SUBMITTED),
        history=[message],
    )


def accept_message(current: Task | None, task_id: str, message: Message) -> Task:
    """Record an incoming ``tasks/send`` message and start working.

    Creates the task if *current* is ``None``; otherwise appends to its
    history and keeps its session. Raises :class:`TaskAlreadyCompletedError`
    for terminal tasks.
    """
    if current is None:
        task = new_task(task_id, message)
    elif is_terminal(current.status.state):
        raise TaskAlreadyCompletedError(task_id, current.status.state.value)
    else:
        task = current.model_copy(update={"history": [*current.history, message]})
    return transition(task, TaskState.WORKING)


def complete(
    task: Task,
    answer: str,
    step_messages: Sequence[Message] = (),
    *,
    artifact_name: str | None = None,
    artifact_description: str | None = None,
) -> Task:
    """Finish *task* with *answer* as its single artifact and status message."""
    artifact = Artifact(
        name=artifact_name,
        description=artifact_description,
        parts=[TextPart(text=answer)],
        index=0,
    )
    finished = transition(task, TaskState.COMPLETED, Message.agent_text(answer))
    return finished.model_copy(
        update={
            "artifacts": [artifact],
            "history": [*task.history, *step_messages],
        }
    )


def fail(task: Task, reason: str) -> Task:
    """Mark *task* failed, explaining *reason* in the status message."""
    return transition(task, TaskState.FAILED, Message.agent_text(reason))
