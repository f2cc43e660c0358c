"""ToolProvider protocol — the common interface for anything that exposes tools.

Every provider satisfies this protocol so that the :class:`ToolDispatcher`
can route tool calls without knowing where a tool is implemented.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from taskagent.core.interface.models import ToolResult


@runtime_checkable
class ToolProvider(Protocol):
    """Discovers and executes tools."""

    async def discover_tools(self) -> list[dict[str, Any]]:
        """Return tools as OpenAI-compatible function schemas.

        Each dict follows the shape::

            {
                "type": "function",
                "function": {
                    "name": "...",
                    "description": "...",
                    "parameters": { ... }   # JSON Schema
                }
            }
        """
        ...

    async def execute_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Execute a tool by name and return its result."""
        ...
