"""A2AClient — discovers a remote agent and drives its ``tasks/*`` methods."""

from __future__ import annotations

from typing import Any, TypeVar
from uuid import uuid4

import httpx
from pydantic import BaseModel, ValidationError

from taskagent.client.errors import A2AClientError, A2AResponseError
from taskagent.server.models import (
    AgentCard,
    GetTaskResult,
    Message,
    SendTaskResult,
    TaskQueryParams,
    TaskSendParams,
    TextPart,
    dump,
)

_M = TypeVar("_M", bound=BaseModel)


class A2AClient:
    """Communicates with a remote A2A-compatible agent.

    Usage::

        async with A2AClient("http://localhost:3000") as client:
            card = await client.fetch_agent_card()
            sent = await client.send_text("roll a die")
            task = await client.get_task(sent.id)
    """

    def __init__(self, base_url: str, *, timeout: float | None = 60.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> A2AClient:
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "A2AClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def fetch_agent_card(self) -> AgentCard:
        """GET ``.well-known/agent.json`` and parse into an :class:`AgentCard`."""
        try:
            response = await self._http().get("/.well-known/agent.json")
            response.raise_for_status()
            return AgentCard.model_validate(response.json())
        except httpx.HTTPError as exc:
            raise A2AClientError(f"Failed to fetch agent card: {exc}") from exc
        except (ValueError, ValidationError) as exc:
            raise A2AClientError(f"Invalid agent card: {exc}") from exc

    async def send_task(self, params: TaskSendParams) -> SendTaskResult:
        result = await self._call("tasks/send", dump(params))
        return _validate(SendTaskResult, result)

    async def send_text(self, text: str, *, task_id: str | None = None) -> SendTaskResult:
        """Send a single user text message as a new (or continued) task."""
        params = TaskSendParams(
            id=task_id or uuid4().hex,
            message=Message(role="user", parts=[TextPart(text=text)]),
        )
        return await self.send_task(params)

    async def get_task(self, task_id: str, *, history_length: int | None = None) -> GetTaskResult:
        params = TaskQueryParams(id=task_id, history_length=history_length)
        result = await self._call("tasks/get", dump(params))
        return _validate(GetTaskResult, result)

    async def _call(self, method: str, params: dict[str, Any]) -> Any:
        request = {"jsonrpc": "2.0", "id": uuid4().hex, "method": method, "params": params}
        try:
            response = await self._http().post("/", json=request)
        except httpx.HTTPError as exc:
            raise A2AClientError(f"{method} request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise A2AClientError(
                f"{method} returned HTTP {response.status_code} with a non-JSON body"
            ) from exc

        error = body.get("error") if isinstance(body, dict) else None
        if error is not None:
            raise A2AResponseError(
                int(error.get("code", 0)),
                str(error.get("message", "")),
                error.get("data"),
            )
        if response.is_error or not isinstance(body, dict) or "result" not in body:
            raise A2AClientError(f"{method} returned an unexpected response (HTTP {response.status_code})")
        return body["result"]


def _validate(model: type[_M], data: Any) -> _M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise A2AClientError(f"Malformed result: {exc}") from exc
