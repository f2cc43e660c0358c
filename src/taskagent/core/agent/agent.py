"""Agent capability — the tool-calling loop behind ``tasks/send``.

:class:`AgentCapability` is the contract the task manager depends on.
:class:`ToolCallingAgent` implements it: call the model, execute any tools it
asks for, feed the results back, and repeat until the model answers without
tool calls or the step budget is spent.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from taskagent.core.agent.errors import AgentError, StepBudgetExceededError
from taskagent.core.agent.models import AgentResult, AgentStep
from taskagent.core.interface.models import CanonicalMessage, ConversationHistory, ToolResult
from taskagent.tools.errors import ToolError
from taskagent.utils.telemetry import ATTR_MAX_STEPS, ATTR_STEP, get_tracer

if TYPE_CHECKING:
    from taskagent.core.interface.client import ModelClient
    from taskagent.core.interface.models import ToolCall
    from taskagent.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_MAX_STEPS = 5


@runtime_checkable
class AgentCapability(Protocol):
    """Turns input messages into a final answer plus intermediate steps.

    Implementations raise :class:`AgentError` when no answer can be produced.
    """

    async def run(self, messages: list[CanonicalMessage]) -> AgentResult: ...


class ToolCallingAgent:
    """Model + tools, bounded by ``max_steps`` model rounds.

    Usage::

        dispatcher = ToolDispatcher()
        await dispatcher.register(LocalToolProvider([dice_tool()]))
        agent = ToolCallingAgent(ModelClient(config), dispatcher, max_steps=5)
        result = await agent.run([CanonicalMessage.user("roll a die")])
    """

    def __init__(
        self,
        client: ModelClient,
        dispatcher: ToolDispatcher,
        *,
        max_steps: int = DEFAULT_MAX_STEPS,
        system_prompt: str | None = None,
    ) -> None:
        if max_steps < 1:
            msg = "max_steps must be at least 1"
            raise ValueError(msg)
        self.client = client
        self.dispatcher = dispatcher
        self.max_steps = max_steps
        self.system_prompt = system_prompt

    async def run(self, messages: list[CanonicalMessage]) -> AgentResult:
        history = ConversationHistory()
        if self.system_prompt:
            history.append(CanonicalMessage.system(self.system_prompt))
        history.extend(messages)

        tools = self.dispatcher.all_tools() or None
        steps: list[AgentStep] = []

        with _tracer.start_as_current_span("agent.run") as span:
            span.set_attribute(ATTR_MAX_STEPS, self.max_steps)

            for step_number in range(1, self.max_steps + 1):
                span.set_attribute(ATTR_STEP, step_number)
                try:
                    response = await self.client.generate(history, tools=tools)
                except Exception as exc:
                    logger.warning("Model call failed at step %d: %s", step_number, exc)
                    raise AgentError("model call failed") from exc
                history.append(response)

                if not response.tool_calls:
                    steps.append(AgentStep(text=response.text))
                    return AgentResult(text=response.text, steps=steps)

                results = await self._execute_tools(response.tool_calls)
                history.extend([CanonicalMessage.tool(r) for r in results])
                steps.append(
                    AgentStep(
                        text=response.text,
                        tool_calls=list(response.tool_calls),
                        tool_results=results,
                    )
                )

        raise StepBudgetExceededError(self.max_steps)

    async def _execute_tools(self, tool_calls: list[ToolCall]) -> list[ToolResult]:
        """Run each call; tool failures go back to the model as error results."""
        results: list[ToolResult] = []
        for call in tool_calls:
            logger.debug("Executing tool %s with %s", call.name, call.arguments)
            try:
                result = await self.dispatcher.execute(call)
            except ToolError as exc:
                logger.warning("Tool %s failed: %s", call.name, exc)
                result = ToolResult.from_text(call.id, f"Error: {exc}", is_error=True)
            results.append(result)
        return results
