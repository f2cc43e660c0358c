"""Shared fixtures: a scripted agent and LiteLLM response mocks."""

from __future__ import annotations

import asyncio
import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from taskagent.core.agent.models import AgentResult, AgentStep
from taskagent.core.interface.models import CanonicalMessage, ToolCall, ToolResult


def _default_result() -> AgentResult:
    call = ToolCall(id="call-1", name="dice", arguments={"dice": 6})
    return AgentResult(
        text="You rolled a 4.",
        steps=[
            AgentStep(text="", tool_calls=[call], tool_results=[ToolResult.from_text("call-1", "4")]),
            AgentStep(text="You rolled a 4."),
        ],
    )


class FakeAgent:
    """Satisfies ``AgentCapability`` with a canned result or error."""

    def __init__(
        self,
        result: AgentResult | None = None,
        error: BaseException | None = None,
        delay: float = 0.0,
    ) -> None:
        self.result = result or _default_result()
        self.error = error
        self.delay = delay
        self.calls: list[list[CanonicalMessage]] = []

    async def run(self, messages: list[CanonicalMessage]) -> AgentResult:
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def make_agent() -> type[FakeAgent]:
    return FakeAgent


@pytest.fixture
def fake_agent() -> FakeAgent:
    return FakeAgent()


def _mock_tool_call(call_id: str, name: str, arguments: dict[str, Any]) -> MagicMock:
    tc = MagicMock()
    tc.id = call_id
    tc.function.name = name
    tc.function.arguments = json.dumps(arguments)
    return tc


def _mock_litellm_response(
    content: str = "",
    tool_calls: list[Any] | None = None,
    finish_reason: str = "stop",
    model: str = "gemini/gemini-2.0-flash",
) -> MagicMock:
    """A ``MagicMock`` matching LiteLLM's response structure."""
    message = MagicMock()
    message.content = content or None
    message.tool_calls = tool_calls

    choice = MagicMock()
    choice.message = message
    choice.finish_reason = finish_reason

    usage = MagicMock()
    usage.prompt_tokens = 10
    usage.completion_tokens = 20
    usage.total_tokens = 30

    response = MagicMock()
    response.choices = [choice]
    response.usage = usage
    response.model = model
    return response


@pytest.fixture
def llm_response() -> Any:
    return _mock_litellm_response


@pytest.fixture
def llm_tool_call() -> Any:
    return _mock_tool_call
