"""ToolDispatcher — routes tool calls to the correct ToolProvider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from taskagent.tools.errors import ToolNotFoundError
from taskagent.utils.telemetry import ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from taskagent.core.interface.models import ToolCall, ToolResult
    from taskagent.tools.provider import ToolProvider

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ToolDispatcher:
    """Maintains a name-to-provider map and dispatches tool calls.

    Usage::

        dispatcher = ToolDispatcher()
        await dispatcher.register(LocalToolProvider([dice_tool()]))

        tools = dispatcher.all_tools()
        result = await dispatcher.execute(call)
    """

    def __init__(self) -> None:
        self._tool_map: dict[str, ToolProvider] = {}
        self._tool_schemas: list[dict[str, Any]] = []

    async def register(self, provider: ToolProvider) -> None:
        """Discover tools from *provider* and add them to the routing table."""
        schemas = await provider.discover_tools()
        for schema in schemas:
            name: str = schema["function"]["name"]
            self._tool_map[name] = provider
            self._tool_schemas.append(schema)
            logger.debug("Registered tool %s", name)

    def all_tools(self) -> list[dict[str, Any]]:
        """Return the merged list of all tool schemas across providers."""
        return list(self._tool_schemas)

    async def execute(self, tool_call: ToolCall) -> ToolResult:
        """Route a single tool call to its owning provider."""
        provider = self._tool_map.get(tool_call.name)
        if provider is None:
            raise ToolNotFoundError(tool_call.name)
        with _tracer.start_as_current_span("tool.execute") as span:
            span.set_attribute(ATTR_TOOL_NAME, tool_call.name)
            result = await provider.execute_tool(tool_call.name, tool_call.arguments)
        return result.model_copy(update={"tool_call_id": tool_call.id})
