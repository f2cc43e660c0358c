"""Server error types, each mapped to a JSON-RPC error code and HTTP status."""

from __future__ import annotations

from typing import Any

from taskagent.server.models import JSONRPCError

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
UNSUPPORTED_OPERATION = -32004


class A2AServerError(Exception):
    """Base error for everything the dispatcher turns into a JSON-RPC error."""

    code: int = INTERNAL_ERROR
    http_status: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, *, data: Any = None) -> None:
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)

    def to_error(self) -> JSONRPCError:
        return JSONRPCError(code=self.code, message=self.message, data=self.data)


class ProtocolError(A2AServerError):
    """The request envelope or method is unusable."""


class JSONParseError(ProtocolError):
    code = PARSE_ERROR
    http_status = 400
    default_message = "Parse error"


class InvalidRequestError(ProtocolError):
    code = INVALID_REQUEST
    http_status = 400
    default_message = "Invalid Request"


class MethodNotFoundError(ProtocolError):
    code = METHOD_NOT_FOUND
    http_status = 404
    default_message = "Method not found"


class UnsupportedOperationError(ProtocolError):
    """A known method this server does not implement yet."""

    code = UNSUPPORTED_OPERATION
    http_status = 501
    default_message = "Unsupported operation"

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unsupported operation: {method}")


class InvalidParamsError(A2AServerError):
    code = INVALID_PARAMS
    http_status = 400
    default_message = "Invalid params"


class TaskNotFoundError(A2AServerError):
    http_status = 404
    default_message = "Task not found"

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(data={"id": task_id})


class TaskAlreadyCompletedError(A2AServerError):
    """``tasks/send`` on a task that is completed, canceled or failed."""

    http_status = 400
    default_message = "Task already completed"

    def __init__(self, task_id: str, state: str) -> None:
        self.task_id = task_id
        self.state = state
        super().__init__(data={"id": task_id, "state": state})


class InvalidStateTransitionError(A2AServerError):
    """A transition outside the task state graph was attempted."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Invalid state transition: {current} -> {target}")


class InternalError(A2AServerError):
    pass
