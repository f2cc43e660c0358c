"""JSON-RPC dispatcher — envelope validation, method routing, response shaping.

Every inbound request goes through :func:`parse_request` before any method
logic runs. Handler errors become JSON-RPC error objects paired with the HTTP
status of the raised :class:`A2AServerError`; nothing propagates to the
transport.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ValidationError

from taskagent.server.errors import (
    A2AServerError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    JSONParseError,
    MethodNotFoundError,
)
from taskagent.server.manager import TaskManager
from taskagent.server.models import (
    JSONRPCRequest,
    RequestId,
    TaskIdParams,
    TaskQueryParams,
    TaskSendParams,
    error_response,
    success_response,
)
from taskagent.utils.telemetry import ATTR_RPC_ERROR_CODE, ATTR_RPC_METHOD, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

Handler = Callable[[Any], Awaitable[BaseModel | None]]


class DispatchResult(BaseModel):
    """A JSON-RPC response body and the HTTP status to send it with."""

    body: dict[str, Any]
    status_code: int = 200


def parse_request(body: Any) -> JSONRPCRequest:
    """Validate the JSON-RPC envelope or raise :class:`InvalidRequestError`."""
    try:
        return JSONRPCRequest.model_validate(body)
    except ValidationError as exc:
        raise InvalidRequestError(data=_describe(exc)) from exc


class JSONRPCDispatcher:
    """Routes ``tasks/*`` requests to a :class:`TaskManager`.

    Usage::

        dispatcher = JSONRPCDispatcher(manager)
        result = await dispatcher.dispatch_raw(await request.body())
        return JSONResponse(result.body, status_code=result.status_code)
    """

    def __init__(self, manager: TaskManager) -> None:
        self.manager = manager
        self._routes: dict[str, tuple[type[BaseModel], Handler]] = {
            "tasks/send": (TaskSendParams, manager.on_send_task),
            "tasks/get": (TaskQueryParams, manager.on_get_task),
            "tasks/cancel": (TaskIdParams, manager.on_cancel_task),
            "tasks/sendSubscribe": (TaskSendParams, manager.on_send_task_subscribe),
        }

    @property
    def methods(self) -> list[str]:
        return list(self._routes)

    async def dispatch_raw(self, raw: bytes | str) -> DispatchResult:
        """Decode a request body and dispatch it."""
        try:
            body = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return _error(None, JSONParseError(data=str(exc)))
        return await self.dispatch(body)

    async def dispatch(self, body: Any) -> DispatchResult:
        """Dispatch an already-decoded request body."""
        request_id = _peek_id(body)
        with _tracer.start_as_current_span("rpc.dispatch") as span:
            try:
                request = parse_request(body)
                span.set_attribute(ATTR_RPC_METHOD, request.method)
                result = await self._route(request)
            except A2AServerError as exc:
                span.set_attribute(ATTR_RPC_ERROR_CODE, exc.code)
                logger.debug("Request %r failed with %s: %s", request_id, exc.code, exc.message)
                return _error(request_id, exc)
            except Exception:
                logger.exception("Unhandled error while dispatching request %r", request_id)
                error = InternalError()
                span.set_attribute(ATTR_RPC_ERROR_CODE, error.code)
                return _error(request_id, error)

        if result is None:
            return DispatchResult(body={"jsonrpc": "2.0", "id": request_id, "result": None})
        return DispatchResult(body=success_response(request_id, result))

    async def _route(self, request: JSONRPCRequest) -> BaseModel | None:
        route = self._routes.get(request.method)
        if route is None:
            raise MethodNotFoundError(data={"method": request.method})
        params_model, handler = route
        logger.debug("Routing %s (id=%r)", request.method, request.id)
        return await handler(_parse_params(params_model, request.params))


def _parse_params(model: type[BaseModel], params: dict[str, Any] | list[Any] | None) -> Any:
    if params is None:
        raise InvalidParamsError(data="params are required")
    if not isinstance(params, dict):
        raise InvalidParamsError(data="params must be an object")
    try:
        return model.model_validate(params)
    except ValidationError as exc:
        raise InvalidParamsError(data=_describe(exc)) from exc


def _peek_id(body: Any) -> RequestId:
    """Best-effort request id for error responses on malformed envelopes."""
    if isinstance(body, dict):
        value = body.get("id")
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return value
    return None


def _describe(exc: ValidationError) -> list[dict[str, str]]:
    return [
        {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
        for err in exc.errors()
    ]


def _error(request_id: RequestId, exc: A2AServerError) -> DispatchResult:
    return DispatchResult(
        body=error_response(request_id, exc.to_error()),
        status_code=exc.http_status,
    )
