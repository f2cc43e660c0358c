"""ModelClient — async interface to LLMs via LiteLLM.

Wraps LiteLLM behind a canonical-message interface so the agent loop only
ever deals with :class:`CanonicalMessage` and :class:`ConversationHistory`.
"""

import json
from typing import Any

import litellm

from taskagent.core.interface.config import ModelConfig
from taskagent.core.interface.models import (
    CanonicalMessage,
    ConversationHistory,
    TextContent,
    ToolCall,
)
from taskagent.utils.telemetry import (
    ATTR_FINISH_REASON,
    ATTR_MODEL,
    ATTR_PROVIDER,
    ATTR_TOKENS_COMPLETION,
    ATTR_TOKENS_PROMPT,
    ATTR_TOKENS_TOTAL,
    get_tracer,
)

_tracer = get_tracer(__name__)


class ModelClient:
    """Async client for generating LLM responses via LiteLLM.

    Usage::

        client = ModelClient(ModelConfig(model="gemini/gemini-2.0-flash"))
        response = await client.generate(history, tools=schemas)
    """

    def __init__(self, config: ModelConfig) -> None:
        self.config = config

    async def generate(
        self,
        messages: ConversationHistory,
        tools: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> CanonicalMessage:
        """Generate a response from the configured model.

        Args:
            messages: The conversation so far.
            tools: Optional tool definitions in OpenAI function schema format.
            **kwargs: Additional parameters passed to LiteLLM.

        Returns:
            An assistant-role :class:`CanonicalMessage`.
        """
        with _tracer.start_as_current_span("model.generate") as span:
            span.set_attribute(ATTR_MODEL, self.config.model)
            span.set_attribute(ATTR_PROVIDER, self.config.provider)

            call_kwargs: dict[str, Any] = {
                "model": self.config.model,
                "messages": [m.to_openai() for m in messages],
                **self.config.extra,
                **kwargs,
            }

            if self.config.api_key:
                call_kwargs["api_key"] = self.config.api_key
            if self.config.api_base:
                call_kwargs["api_base"] = self.config.api_base
            if self.config.temperature is not None:
                call_kwargs["temperature"] = self.config.temperature

            if tools:
                call_kwargs["tools"] = tools

            response = await litellm.acompletion(**call_kwargs)  # pyright: ignore[reportUnknownMemberType]
            result = self._parse_response(response)

            usage: dict[str, Any] | None = result.metadata.get("usage")
            if isinstance(usage, dict):
                span.set_attribute(ATTR_TOKENS_PROMPT, int(usage.get("prompt_tokens", 0)))
                span.set_attribute(ATTR_TOKENS_COMPLETION, int(usage.get("completion_tokens", 0)))
                span.set_attribute(ATTR_TOKENS_TOTAL, int(usage.get("total_tokens", 0)))
            finish_reason = result.metadata.get("finish_reason")
            if finish_reason is not None:
                span.set_attribute(ATTR_FINISH_REASON, str(finish_reason))

            return result

    def _parse_response(self, response: Any) -> CanonicalMessage:
        """Convert a LiteLLM response to a CanonicalMessage.

        LiteLLM returns OpenAI-compatible response objects regardless of
        the underlying provider.
        """
        message = response.choices[0].message

        content: list[TextContent] = []
        if message.content:
            content = [TextContent(text=message.content)]

        tool_calls: list[ToolCall] | None = None
        if message.tool_calls:
            tool_calls = [
                ToolCall(
                    id=tc.id,
                    name=tc.function.name,
                    arguments=_parse_arguments(tc.function.arguments),
                )
                for tc in message.tool_calls
            ]

        metadata: dict[str, Any] = {}
        if getattr(response, "usage", None):
            metadata["usage"] = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }
        metadata["finish_reason"] = response.choices[0].finish_reason
        metadata["model"] = response.model

        return CanonicalMessage(
            role="assistant",
            content=content,
            tool_calls=tool_calls,
            metadata=metadata,
        )


def _parse_arguments(raw: str | None) -> dict[str, Any]:
    """Parse JSON string arguments from a tool call."""
    if not raw:
        return {}
    try:
        result = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return {"raw": raw}
    if not isinstance(result, dict):
        return {"raw": raw}
    return result
