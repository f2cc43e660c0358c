"""In-process tools backed by plain Python callables."""

from __future__ import annotations

import inspect
import json
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from taskagent.core.interface.models import ToolResult
from taskagent.tools.errors import ToolExecutionError, ToolNotFoundError

ToolFunc = Callable[..., Any]


class FunctionTool(BaseModel):
    """A named tool whose arguments are validated by a pydantic model."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str = ""
    args_model: type[BaseModel]
    func: ToolFunc

    def to_schema(self) -> dict[str, Any]:
        """OpenAI function schema derived from ``args_model``."""
        parameters = self.args_model.model_json_schema()
        parameters.pop("title", None)
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": parameters,
            },
        }

    async def invoke(self, arguments: dict[str, Any]) -> Any:
        try:
            args = self.args_model.model_validate(arguments)
        except ValidationError as exc:
            raise ToolExecutionError(self.name, f"invalid arguments: {exc}") from exc
        value = self.func(**args.model_dump())
        if inspect.isawaitable(value):
            value = await value
        return value


class LocalToolProvider:
    """Exposes a fixed set of :class:`FunctionTool` objects.

    Satisfies the :class:`~taskagent.tools.provider.ToolProvider` protocol.
    """

    def __init__(self, tools: list[FunctionTool]) -> None:
        self._tools: dict[str, FunctionTool] = {t.name: t for t in tools}

    async def discover_tools(self) -> list[dict[str, Any]]:
        return [tool.to_schema() for tool in self._tools.values()]

    async def execute_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        try:
            value = await tool.invoke(arguments)
        except ToolExecutionError:
            raise
        except Exception as exc:
            raise ToolExecutionError(name, str(exc)) from exc
        text = value if isinstance(value, str) else json.dumps(value, default=str)
        return ToolResult.from_text(tool_call_id="", text=text)
