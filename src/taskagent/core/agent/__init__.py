"""Agent capability — tool-calling loop with a step budget."""

from taskagent.core.agent.agent import DEFAULT_MAX_STEPS, AgentCapability, ToolCallingAgent
from taskagent.core.agent.errors import AgentError, AgentTimeoutError, StepBudgetExceededError
from taskagent.core.agent.models import AgentResult, AgentStep

__all__ = [
    "DEFAULT_MAX_STEPS",
    "AgentCapability",
    "AgentError",
    "AgentResult",
    "AgentStep",
    "AgentTimeoutError",
    "StepBudgetExceededError",
    "ToolCallingAgent",
]
