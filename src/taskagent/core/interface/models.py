"""Canonical chat messages exchanged with the model client.

These are the provider-neutral shapes the agent loop works with. A2A wire
types live in :mod:`taskagent.server.models`; the agent converts between
the two at its boundary.
"""

import json
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, Field


class TextContent(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


# ---------------------------------------------------------------------------
# Tool Calling
# ---------------------------------------------------------------------------


class ToolCall(BaseModel):
    """A tool invocation emitted by an assistant message."""

    id: str = Field(default_factory=lambda: uuid4().hex[:12])
    name: str
    arguments: dict[str, Any] = {}


class ToolResult(BaseModel):
    """The result of executing a tool, returned as a tool-role message."""

    tool_call_id: str
    content: list[TextContent] = []
    is_error: bool = False

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.content)

    @classmethod
    def from_text(cls, tool_call_id: str, text: str, *, is_error: bool = False) -> "ToolResult":
        """Create a ToolResult with a single text content part."""
        return cls(tool_call_id=tool_call_id, content=[TextContent(text=text)], is_error=is_error)


# ---------------------------------------------------------------------------
# Canonical Message
# ---------------------------------------------------------------------------


class CanonicalMessage(BaseModel):
    """A single chat message.

    Roles:
    - system: instruction/context messages
    - user: human input
    - assistant: model-generated messages (may include tool_calls)
    - tool: tool execution results (must include tool_call_id)
    """

    role: Literal["system", "user", "assistant", "tool"]
    content: list[TextContent] = []
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None
    metadata: dict[str, Any] = {}

    @property
    def text(self) -> str:
        """Concatenated text of all content parts."""
        return "".join(part.text for part in self.content)

    @classmethod
    def system(cls, text: str, **metadata: Any) -> "CanonicalMessage":
        return cls(role="system", content=[TextContent(text=text)], metadata=metadata)

    @classmethod
    def user(cls, text: str, **metadata: Any) -> "CanonicalMessage":
        return cls(role="user", content=[TextContent(text=text)], metadata=metadata)

    @classmethod
    def assistant(
        cls,
        text: str = "",
        tool_calls: list[ToolCall] | None = None,
        **metadata: Any,
    ) -> "CanonicalMessage":
        content = [TextContent(text=text)] if text else []
        return cls(role="assistant", content=content, tool_calls=tool_calls, metadata=metadata)

    @classmethod
    def tool(cls, result: ToolResult, **metadata: Any) -> "CanonicalMessage":
        return cls(
            role="tool",
            content=list(result.content),
            tool_call_id=result.tool_call_id,
            metadata=metadata,
        )

    def to_openai(self) -> dict[str, Any]:
        """Render this message in the OpenAI chat format LiteLLM expects."""
        result: dict[str, Any] = {"role": self.role}

        if self.role == "tool":
            result["tool_call_id"] = self.tool_call_id
            result["content"] = self.text
            return result

        result["content"] = self.text if self.content else None

        if self.tool_calls:
            result["tool_calls"] = [
                {
                    "id": tc.id,
                    "type": "function",
                    "function": {
                        "name": tc.name,
                        "arguments": json.dumps(tc.arguments),
                    },
                }
                for tc in self.tool_calls
            ]

        return result


class ConversationHistory(BaseModel):
    """An ordered sequence of canonical messages forming a conversation."""

    messages: list[CanonicalMessage] = []

    def append(self, message: CanonicalMessage) -> None:
        self.messages.append(message)

    def extend(self, messages: list[CanonicalMessage]) -> None:
        self.messages.extend(messages)

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):  # type: ignore[override]
        return iter(self.messages)
