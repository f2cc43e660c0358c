"""Tests for ModelClient — unit tests with mocked LiteLLM."""

from unittest.mock import AsyncMock, patch

import pytest

from taskagent.core.interface.client import ModelClient
from taskagent.core.interface.config import ModelConfig
from taskagent.core.interface.models import (
    CanonicalMessage,
    ConversationHistory,
    ToolCall,
    ToolResult,
)


def _history(*messages: CanonicalMessage) -> ConversationHistory:
    return ConversationHistory(messages=list(messages))


class TestModelConfig:
    def test_provider_extraction(self) -> None:
        assert ModelConfig(model="gemini/gemini-2.0-flash").provider == "gemini"

    def test_provider_no_prefix(self) -> None:
        assert ModelConfig(model="gpt-4o").provider == "openai"

    def test_default_model(self) -> None:
        assert ModelConfig().model == "gemini/gemini-2.0-flash"


class TestToOpenAI:
    def test_assistant_tool_calls(self) -> None:
        message = CanonicalMessage.assistant(
            tool_calls=[ToolCall(id="c1", name="dice", arguments={"dice": 20})]
        )
        rendered = message.to_openai()
        assert rendered["content"] is None
        assert rendered["tool_calls"][0]["function"] == {
            "name": "dice",
            "arguments": '{"dice": 20}',
        }

    def test_tool_result(self) -> None:
        rendered = CanonicalMessage.tool(ToolResult.from_text("c1", "17")).to_openai()
        assert rendered == {"role": "tool", "tool_call_id": "c1", "content": "17"}


class TestModelClientGenerate:
    async def test_text_response(self, llm_response) -> None:
        client = ModelClient(ModelConfig(model="gemini/gemini-2.0-flash"))
        mock = AsyncMock(return_value=llm_response(content="Hello!"))

        with patch("taskagent.core.interface.client.litellm.acompletion", mock):
            result = await client.generate(_history(CanonicalMessage.user("Hi")))

        assert result.role == "assistant"
        assert result.text == "Hello!"
        assert result.tool_calls is None
        assert result.metadata["usage"]["total_tokens"] == 30
        assert result.metadata["finish_reason"] == "stop"
        kwargs = mock.await_args.kwargs
        assert kwargs["model"] == "gemini/gemini-2.0-flash"
        assert kwargs["messages"] == [{"role": "user", "content": "Hi"}]
        assert "tools" not in kwargs

    async def test_tool_call_response(self, llm_response, llm_tool_call) -> None:
        client = ModelClient(ModelConfig())
        response = llm_response(
            tool_calls=[llm_tool_call("c1", "dice", {"dice": 6})],
            finish_reason="tool_calls",
        )
        tools = [{"type": "function", "function": {"name": "dice", "parameters": {}}}]

        with patch(
            "taskagent.core.interface.client.litellm.acompletion",
            AsyncMock(return_value=response),
        ) as mock:
            result = await client.generate(_history(CanonicalMessage.user("roll")), tools=tools)

        assert result.content == []
        assert result.tool_calls == [ToolCall(id="c1", name="dice", arguments={"dice": 6})]
        assert mock.await_args.kwargs["tools"] == tools

    async def test_config_is_forwarded(self, llm_response) -> None:
        config = ModelConfig(
            model="openai/gpt-4o",
            api_key="sk-test",
            api_base="http://localhost:4000",
            temperature=0.2,
            extra={"max_tokens": 64},
        )
        mock = AsyncMock(return_value=llm_response(content="ok"))

        with patch("taskagent.core.interface.client.litellm.acompletion", mock):
            await ModelClient(config).generate(_history(CanonicalMessage.user("Hi")))

        kwargs = mock.await_args.kwargs
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["api_base"] == "http://localhost:4000"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 64

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", {}),
            ("not json", {"raw": "not json"}),
            ("[1, 2]", {"raw": "[1, 2]"}),
        ],
    )
    async def test_malformed_tool_arguments(
        self, llm_response, llm_tool_call, raw: str, expected: dict[str, object]
    ) -> None:
        tool_call = llm_tool_call("c1", "dice", {})
        tool_call.function.arguments = raw
        mock = AsyncMock(return_value=llm_response(tool_calls=[tool_call]))

        with patch("taskagent.core.interface.client.litellm.acompletion", mock):
            result = await ModelClient(ModelConfig()).generate(
                _history(CanonicalMessage.user("roll"))
            )

        assert result.tool_calls is not None
        assert result.tool_calls[0].arguments == expected
