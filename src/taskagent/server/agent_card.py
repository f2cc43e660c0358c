"""Builds the static agent card served at ``/.well-known/agent.json``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskagent.server.models import AgentCapabilities, AgentCard

if TYPE_CHECKING:
    from taskagent.config import ServerSettings


def build_agent_card(settings: ServerSettings) -> AgentCard:
    """Streaming, push notifications and transition history are not offered."""
    agent = settings.agent
    return AgentCard(
        name=agent.name,
        description=agent.description,
        url=settings.public_url,
        provider=agent.provider,
        version=agent.version,
        documentation_url=agent.documentation_url,
        capabilities=AgentCapabilities(),
        skills=list(agent.skills),
    )
