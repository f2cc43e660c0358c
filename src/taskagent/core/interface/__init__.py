"""Model interface — canonical messages and the LiteLLM client."""

from taskagent.core.interface.client import ModelClient
from taskagent.core.interface.config import DEFAULT_MODEL, ModelConfig
from taskagent.core.interface.models import (
    CanonicalMessage,
    ConversationHistory,
    TextContent,
    ToolCall,
    ToolResult,
)

__all__ = [
    "DEFAULT_MODEL",
    "CanonicalMessage",
    "ConversationHistory",
    "ModelClient",
    "ModelConfig",
    "TextContent",
    "ToolCall",
    "ToolResult",
]
