"""A2A task server — store, state machine, task manager and JSON-RPC dispatcher."""

from taskagent.server.dispatcher import DispatchResult, JSONRPCDispatcher, parse_request
from taskagent.server.errors import (
    A2AServerError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    InvalidStateTransitionError,
    JSONParseError,
    MethodNotFoundError,
    ProtocolError,
    TaskAlreadyCompletedError,
    TaskNotFoundError,
    UnsupportedOperationError,
)
from taskagent.server.manager import TaskManager
from taskagent.server.store import InMemoryTaskStore, TaskStore

__all__ = [
    "A2AServerError",
    "DispatchResult",
    "InMemoryTaskStore",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "InvalidStateTransitionError",
    "JSONParseError",
    "JSONRPCDispatcher",
    "MethodNotFoundError",
    "ProtocolError",
    "TaskAlreadyCompletedError",
    "TaskManager",
    "TaskNotFoundError",
    "TaskStore",
    "UnsupportedOperationError",
    "parse_request",
]
