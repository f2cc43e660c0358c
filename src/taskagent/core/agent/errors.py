"""Errors raised by the agent capability."""


class AgentError(Exception):
    """The agent could not produce a final answer."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Agent failed" + (f": {detail}" if detail else ""))


class StepBudgetExceededError(AgentError):
    """The model kept requesting tools after the step budget was spent."""

    def __init__(self, max_steps: int) -> None:
        self.max_steps = max_steps
        super().__init__(f"no final answer after {max_steps} steps")


class AgentTimeoutError(AgentError):
    """The agent did not finish within the allotted time."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"timed out after {timeout}s")
