"""Tests for the tool-calling agent loop with a mocked model client."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskagent.core.agent.agent import AgentCapability, ToolCallingAgent
from taskagent.core.agent.errors import AgentError, StepBudgetExceededError
from taskagent.core.interface.models import CanonicalMessage, ConversationHistory, ToolCall
from taskagent.tools.dice import dice_tool
from taskagent.tools.dispatcher import ToolDispatcher
from taskagent.tools.local import LocalToolProvider


def _client(*responses: CanonicalMessage | Exception) -> MagicMock:
    """A model client that replays *responses* and snapshots each prompt."""
    client = MagicMock()
    client.prompts = []
    queue = list(responses)

    def generate(history: ConversationHistory, **_: object) -> CanonicalMessage:
        client.prompts.append([m.model_copy() for m in history])
        response = queue.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    client.generate = AsyncMock(side_effect=generate)
    return client


def _dice_call(call_id: str = "c1", name: str = "dice", **arguments: object) -> CanonicalMessage:
    return CanonicalMessage.assistant(
        tool_calls=[ToolCall(id=call_id, name=name, arguments=arguments or {"dice": 6})]
    )


def _prompt(client: MagicMock, call_index: int) -> list[CanonicalMessage]:
    return client.prompts[call_index]


@pytest.fixture
async def tools() -> ToolDispatcher:
    dispatcher = ToolDispatcher()
    await dispatcher.register(LocalToolProvider([dice_tool(random.Random(7))]))
    return dispatcher


class TestToolCallingAgent:
    def test_satisfies_capability_protocol(self) -> None:
        assert isinstance(ToolCallingAgent(_client(), ToolDispatcher()), AgentCapability)

    def test_rejects_zero_step_budget(self) -> None:
        with pytest.raises(ValueError, match="max_steps"):
            ToolCallingAgent(_client(), ToolDispatcher(), max_steps=0)

    async def test_direct_answer(self, tools: ToolDispatcher) -> None:
        client = _client(CanonicalMessage.assistant("Hello!"))
        agent = ToolCallingAgent(client, tools)

        result = await agent.run([CanonicalMessage.user("hi")])

        assert result.text == "Hello!"
        assert len(result.steps) == 1
        assert result.steps[0].tool_calls == []
        assert client.generate.await_count == 1

    async def test_tools_are_offered_to_model(self, tools: ToolDispatcher) -> None:
        client = _client(CanonicalMessage.assistant("ok"))
        await ToolCallingAgent(client, tools).run([CanonicalMessage.user("hi")])

        offered = client.generate.await_args.kwargs["tools"]
        assert [t["function"]["name"] for t in offered] == ["dice"]

    async def test_tool_round_then_answer(self, tools: ToolDispatcher) -> None:
        client = _client(_dice_call(), CanonicalMessage.assistant("You rolled it."))
        agent = ToolCallingAgent(client, tools)

        result = await agent.run([CanonicalMessage.user("roll a die")])

        assert result.text == "You rolled it."
        assert len(result.steps) == 2
        tool_step = result.steps[0]
        assert tool_step.tool_calls[0].name == "dice"
        assert tool_step.tool_results[0].tool_call_id == "c1"
        assert 1 <= int(tool_step.tool_results[0].text) <= 6

        second = _prompt(client, 1)
        assert [m.role for m in second] == ["user", "assistant", "tool"]
        assert second[-1].tool_call_id == "c1"

    async def test_system_prompt_is_optional(self, tools: ToolDispatcher) -> None:
        client = _client(CanonicalMessage.assistant("ok"))
        await ToolCallingAgent(client, tools, system_prompt=None).run(
            [CanonicalMessage.user("hi")]
        )
        assert [m.role for m in _prompt(client, 0)] == ["user"]

    async def test_custom_system_prompt_goes_first(self, tools: ToolDispatcher) -> None:
        client = _client(CanonicalMessage.assistant("ok"))
        await ToolCallingAgent(client, tools, system_prompt="Be brief.").run(
            [CanonicalMessage.user("hi")]
        )
        first = _prompt(client, 0)[0]
        assert first.role == "system"
        assert first.text == "Be brief."

    async def test_unknown_tool_is_reported_back_to_model(self, tools: ToolDispatcher) -> None:
        client = _client(_dice_call(name="coin"), CanonicalMessage.assistant("No coin tool."))
        result = await ToolCallingAgent(client, tools).run([CanonicalMessage.user("flip")])

        error = result.steps[0].tool_results[0]
        assert error.is_error
        assert "coin" in error.text
        assert result.text == "No coin tool."

    async def test_invalid_tool_arguments_are_reported_back(self, tools: ToolDispatcher) -> None:
        client = _client(_dice_call(dice=0), CanonicalMessage.assistant("Bad die."))
        result = await ToolCallingAgent(client, tools).run([CanonicalMessage.user("roll")])

        assert result.steps[0].tool_results[0].is_error
        assert "invalid arguments" in result.steps[0].tool_results[0].text

    async def test_step_budget_exceeded(self, tools: ToolDispatcher) -> None:
        client = _client(*[_dice_call(call_id=f"c{i}") for i in range(3)])
        agent = ToolCallingAgent(client, tools, max_steps=3)

        with pytest.raises(StepBudgetExceededError) as exc_info:
            await agent.run([CanonicalMessage.user("roll forever")])

        assert exc_info.value.max_steps == 3
        assert client.generate.await_count == 3

    async def test_model_failure_becomes_agent_error(self, tools: ToolDispatcher) -> None:
        upstream = RuntimeError("rate limited for key sk-test")
        client = _client(upstream)
        with pytest.raises(AgentError, match="model call failed") as exc_info:
            await ToolCallingAgent(client, tools).run([CanonicalMessage.user("hi")])

        assert "sk-test" not in str(exc_info.value)
        assert exc_info.value.__cause__ is upstream
