"""Tools the agent can call during its tool-calling loop."""

from taskagent.tools.dice import dice_tool
from taskagent.tools.dispatcher import ToolDispatcher
from taskagent.tools.errors import ToolError, ToolExecutionError, ToolNotFoundError
from taskagent.tools.local import FunctionTool, LocalToolProvider
from taskagent.tools.provider import ToolProvider

__all__ = [
    "FunctionTool",
    "LocalToolProvider",
    "ToolDispatcher",
    "ToolError",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolProvider",
    "dice_tool",
]
