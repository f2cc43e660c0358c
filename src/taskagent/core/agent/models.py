"""Result types returned by an agent run."""

from __future__ import annotations

from pydantic import BaseModel

from taskagent.core.interface.models import ToolCall, ToolResult


class AgentStep(BaseModel):
    """One model round: the text it produced and any tools it used."""

    text: str = ""
    tool_calls: list[ToolCall] = []
    tool_results: list[ToolResult] = []


class AgentResult(BaseModel):
    """Final answer plus the ordered steps that led to it."""

    text: str
    steps: list[AgentStep] = []
