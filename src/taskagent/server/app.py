"""FastAPI application: agent card discovery plus the JSON-RPC endpoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from taskagent import __version__
from taskagent.config import ServerSettings
from taskagent.core.agent.agent import ToolCallingAgent
from taskagent.core.interface.client import ModelClient
from taskagent.server.agent_card import build_agent_card
from taskagent.server.dispatcher import JSONRPCDispatcher
from taskagent.server.manager import TaskManager
from taskagent.server.models import AgentCard, dump
from taskagent.tools.dice import dice_tool
from taskagent.tools.dispatcher import ToolDispatcher
from taskagent.tools.local import LocalToolProvider

logger = logging.getLogger(__name__)


async def build_manager(settings: ServerSettings) -> TaskManager:
    """Wire the model client, the dice tool and the agent into a TaskManager."""
    tools = ToolDispatcher()
    await tools.register(LocalToolProvider([dice_tool()]))
    agent = ToolCallingAgent(
        ModelClient(settings.model),
        tools,
        max_steps=settings.max_steps,
        system_prompt=settings.system_prompt,
    )
    return TaskManager(
        agent,
        adapter_timeout=settings.adapter_timeout,
        artifact_name=settings.agent.artifact_name,
        artifact_description=settings.agent.artifact_description,
    )


def create_app(
    settings: ServerSettings | None = None,
    *,
    manager: TaskManager | None = None,
    agent_card: AgentCard | None = None,
) -> FastAPI:
    """Build the ASGI app.

    When *manager* is omitted one is built from *settings* at startup.
    """
    resolved = settings or ServerSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "rpc", None) is None:
            app.state.rpc = JSONRPCDispatcher(await build_manager(resolved))
        logger.info("Serving %s at %s", app.state.agent_card.name, app.state.agent_card.url)
        yield

    app = FastAPI(title="taskagent", version=__version__, lifespan=lifespan)
    app.state.agent_card = agent_card or build_agent_card(resolved)
    app.state.rpc = JSONRPCDispatcher(manager) if manager is not None else None

    @app.get("/.well-known/agent.json")
    async def get_agent_card(request: Request) -> JSONResponse:
        return JSONResponse(dump(request.app.state.agent_card))

    @app.post("/")
    async def json_rpc(request: Request) -> JSONResponse:
        rpc: JSONRPCDispatcher = request.app.state.rpc
        result = await rpc.dispatch_raw(await request.body())
        return JSONResponse(result.body, status_code=result.status_code)

    return app
