"""A2A client — talks to a taskagent (or any A2A) server over HTTP."""

from taskagent.client.client import A2AClient
from taskagent.client.errors import A2AClientError, A2AResponseError

__all__ = ["A2AClient", "A2AClientError", "A2AResponseError"]
