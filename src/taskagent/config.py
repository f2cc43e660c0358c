"""Server configuration loaded from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from taskagent.core.agent.agent import DEFAULT_MAX_STEPS
from taskagent.core.interface.config import ModelConfig
from taskagent.server.models import AgentProvider, AgentSkill

DEFAULT_SYSTEM_PROMPT = (
    "You are a dice-rolling agent. Use the dice tool whenever the user asks "
    "for a roll and report the result."
)


def _default_skills() -> list[AgentSkill]:
    return [
        AgentSkill(
            id="dice-roll",
            name="Roll dice",
            description="Rolls an N-sided die and returns the result (1 to 6 by default).",
            tags=["dice", "random"],
            examples=["Roll a die.", "Roll a 20-sided die."],
            input_modes=["text/plain"],
            output_modes=["text/plain"],
        )
    ]


class ConfigError(Exception):
    """Raised when a settings file cannot be read, parsed or validated."""


class AgentCardSettings(BaseModel):
    """Values advertised in the agent card."""

    name: str = "Dice Agent"
    description: str = "An agent that rolls dice."
    version: str = "1.0.0"
    url: str | None = None
    documentation_url: str | None = None
    provider: AgentProvider | None = None
    skills: list[AgentSkill] = Field(default_factory=_default_skills)
    artifact_name: str | None = "dice"
    artifact_description: str | None = "The rolled value"


class TelemetrySettings(BaseModel):
    """Span export. Disabled unless switched on here or by ``serve`` flags."""

    enabled: bool = False
    console: bool = True
    otlp_endpoint: str | None = None
    service_name: str = "taskagent"


class ServerSettings(BaseModel):
    """Top-level settings for ``taskagent serve``."""

    host: str = "localhost"
    port: int = 3000
    model: ModelConfig = Field(default_factory=ModelConfig)
    max_steps: int = Field(default=DEFAULT_MAX_STEPS, ge=1)
    adapter_timeout: float | None = Field(default=None, gt=0)
    system_prompt: str | None = DEFAULT_SYSTEM_PROMPT
    agent: AgentCardSettings = Field(default_factory=AgentCardSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @property
    def public_url(self) -> str:
        return self.agent.url or f"http://{self.host}:{self.port}"


def load_settings(path: str | Path | None = None) -> ServerSettings:
    """Read settings from *path*, or return defaults when *path* is ``None``.

    Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
    before YAML parsing.

    Raises:
        ConfigError: On read errors, YAML errors or schema violations.
    """
    if path is None:
        return ServerSettings()

    settings_path = Path(path)
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {settings_path}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(os.path.expandvars(raw))
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error: {exc}") from exc

    if data is None:
        return ServerSettings()
    if not isinstance(data, dict):
        raise ConfigError("Settings YAML must be a mapping")

    try:
        return ServerSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
