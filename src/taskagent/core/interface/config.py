"""Model configuration — LiteLLM model name plus credentials."""

from typing import Any

from pydantic import BaseModel, Field

DEFAULT_MODEL = "gemini/gemini-2.0-flash"


class ModelConfig(BaseModel):
    """Configuration for a specific model/provider combination.

    The ``model`` field uses LiteLLM's naming convention:
    ``provider/model_name`` (e.g. ``gemini/gemini-2.0-flash``, ``openai/gpt-4o``).
    """

    model: str = DEFAULT_MODEL
    api_key: str | None = None
    api_base: str | None = None
    temperature: float | None = None
    extra: dict[str, Any] = Field(default_factory=lambda: dict[str, Any]())

    @property
    def provider(self) -> str:
        """Extract the provider prefix from the model string."""
        if "/" in self.model:
            return self.model.split("/", 1)[0]
        return "openai"
