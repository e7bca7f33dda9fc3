"""LLM route configuration derived from application settings."""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field

from .settings import Settings


class LlmRoute(BaseModel):
    """LLM endpoint configuration."""

    name: str
    base_url: str
    endpoint: str = "/v1/chat/completions"
    model: str
    timeout_s: float = Field(ge=0.1)
    api_key: str | None = Field(default=None, repr=False)
    response_format: str | None = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


def route_from_settings(settings: Settings) -> LlmRoute:
    """Build the OpenAI-compatible route used by the question provider."""

    return LlmRoute(
        name="openai",
        base_url=settings.OPENAI_BASE_URL,
        model=settings.OPENAI_MODEL,
        timeout_s=settings.LLM_TIMEOUT_S,
        api_key=settings.openai_key(),
    )
