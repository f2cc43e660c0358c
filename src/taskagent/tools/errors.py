"""Error types for tool discovery and execution."""


class ToolError(Exception):
    """Base error for all tool-layer failures."""


class ToolNotFoundError(ToolError):
    """Requested tool does not exist in any registered provider."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolExecutionError(ToolError):
    """A tool invocation failed."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Tool execution failed: {name}" + (f": {detail}" if detail else ""))
