"""Errors raised by :class:`~taskagent.client.client.A2AClient`."""

from __future__ import annotations

from typing import Any


class A2AClientError(Exception):
    """The remote agent could not be reached or returned an unusable response."""


class A2AResponseError(A2AClientError):
    """The remote agent answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"JSON-RPC error {code}: {message}")
