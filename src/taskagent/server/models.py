"""A2A wire models — tasks, messages, artifacts, agent card, JSON-RPC envelope.

Attributes are snake_case; the JSON representation is camelCase
(``sessionId``, ``mimeType``, ``lastChunk`` …). Always serialize with
:func:`dump`, which applies the aliases and drops unset optional fields.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel


class A2AModel(BaseModel):
    """Base for every wire model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def dump(model: BaseModel) -> dict[str, Any]:
    """Serialize *model* to a JSON-ready dict in wire format."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def utc_now() -> str:
    """Current time as an ISO-8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


# ---------------------------------------------------------------------------
# Parts
# ---------------------------------------------------------------------------


class TextPart(A2AModel):
    type: Literal["text"] = "text"
    text: str
    metadata: dict[str, Any] | None = None


class FileContent(A2AModel):
    """File reference: inline base64 ``bytes`` or a ``uri``, never both."""

    name: str | None = None
    mime_type: str | None = None
    bytes: str | None = None
    uri: str | None = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> FileContent:
        if (self.bytes is None) == (self.uri is None):
            msg = "file must set exactly one of 'bytes' or 'uri'"
            raise ValueError(msg)
        return self


class FilePart(A2AModel):
    type: Literal["file"] = "file"
    file: FileContent
    metadata: dict[str, Any] | None = None


class DataPart(A2AModel):
    type: Literal["data"] = "data"
    data: dict[str, Any]
    metadata: dict[str, Any] | None = None


Part = Annotated[TextPart | FilePart | DataPart, Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Messages, status, artifacts, tasks
# ---------------------------------------------------------------------------


class Message(A2AModel):
    """One conversational turn."""

    role: Literal["user", "agent"]
    parts: list[Part]
    metadata: dict[str, Any] | None = None

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(p.text for p in self.parts if isinstance(p, TextPart))

    @classmethod
    def agent_text(cls, text: str) -> Message:
        return cls(role="agent", parts=[TextPart(text=text)])


class TaskState(str, Enum):
    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"
    UNKNOWN = "unknown"


class TaskStatus(A2AModel):
    state: TaskState
    message: Message | None = None
    timestamp: str = Field(default_factory=utc_now)


class Artifact(A2AModel):
    name: str | None = None
    description: str | None = None
    parts: list[Part]
    metadata: dict[str, Any] | None = None
    index: int = Field(default=0, ge=0)
    append: bool | None = None
    last_chunk: bool | None = None


class Task(A2AModel):
    """A task and its conversation.

    Treated as an immutable value: every change produces a new instance via
    ``model_copy(update=...)`` and is committed through the task store.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    session_id: str
    status: TaskStatus
    history: list[Message] = []
    artifacts: list[Artifact] = []
    metadata: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Method params and results
# ---------------------------------------------------------------------------


class TaskIdParams(A2AModel):
    id: str = Field(min_length=1)
    metadata: dict[str, Any] | None = None


class TaskQueryParams(TaskIdParams):
    history_length: int | None = Field(default=None, ge=0)


class TaskSendParams(TaskQueryParams):
    session_id: str | None = None
    message: Message
    push_notification: dict[str, Any] | None = None


class SendTaskResult(A2AModel):
    id: str
    session_id: str
    status: TaskState
    artifacts: list[Artifact] = []


class GetTaskResult(A2AModel):
    id: str
    session_id: str
    status: TaskStatus
    artifacts: list[Artifact] = []
    history: list[Message] | None = None


# ---------------------------------------------------------------------------
# Agent card
# ---------------------------------------------------------------------------


class AgentProvider(A2AModel):
    organization: str
    url: str | None = None


class AgentCapabilities(A2AModel):
    streaming: bool = False
    push_notifications: bool = False
    state_transition_history: bool = False


class AgentAuthentication(A2AModel):
    schemes: list[str] = []
    credentials: str | None = None


class AgentSkill(A2AModel):
    id: str
    name: str
    description: str = ""
    tags: list[str] = []
    examples: list[str] | None = None
    input_modes: list[str] | None = None
    output_modes: list[str] | None = None


class AgentCard(A2AModel):
    """Agent self-description served at ``/.well-known/agent.json``."""

    name: str
    description: str = ""
    url: str
    provider: AgentProvider | None = None
    version: str = "1.0.0"
    documentation_url: str | None = None
    capabilities: AgentCapabilities = Field(default_factory=AgentCapabilities)
    authentication: AgentAuthentication = Field(default_factory=AgentAuthentication)
    default_input_modes: list[str] = ["text/plain"]
    default_output_modes: list[str] = ["text/plain"]
    skills: list[AgentSkill] = []


# ---------------------------------------------------------------------------
# JSON-RPC envelope
# ---------------------------------------------------------------------------

RequestId = StrictStr | StrictInt | StrictFloat | None


class JSONRPCRequest(BaseModel):
    """A validated inbound JSON-RPC 2.0 request."""

    jsonrpc: Literal["2.0"]
    id: RequestId
    method: StrictStr
    params: dict[str, Any] | list[Any] | None = None


class JSONRPCError(BaseModel):
    code: int
    message: str
    data: Any = None


def success_response(request_id: RequestId, result: BaseModel) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": dump(result)}


def error_response(request_id: RequestId, error: JSONRPCError) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": error.model_dump(exclude_none=True)}
