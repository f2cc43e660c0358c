"""taskagent — an A2A task server that runs a tool-calling agent behind JSON-RPC."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from taskagent.server.app import create_app as create_app
    from taskagent.server.manager import TaskManager as TaskManager

_SERVER_EXPORTS = {
    "create_app": "taskagent.server.app",
    "TaskManager": "taskagent.server.manager",
}


def __getattr__(name: str) -> object:
    module_path = _SERVER_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'taskagent' has no attribute {name!r}")
