"""Application settings and configuration management."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_KEYS = {"", "your_openai_api_key_here", "changeme"}
MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults.

    Built once at process start by :func:`load_settings` and handed to every
    component constructor; business modules never read the environment.
    """

    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    DB_PATH: str = Field(default="data/campusprep.db")
    CLIENT_URL: str = "http://localhost:5173"

    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_TTL_MINUTES: int = Field(default=15, ge=1)
    REFRESH_TOKEN_TTL_DAYS: int = Field(default=7, ge=1)
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=16)

    AI_PROVIDER: Literal["auto", "openai", "stub"] = "auto"
    OPENAI_API_KEY: Optional[SecretStr] = None
    OPENAI_BASE_URL: str = "https://api.openai.com"
    OPENAI_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT_S: float = Field(default=30.0, ge=0.1)
    MAX_ANSWER_CHARS: int = Field(default=4000, ge=100)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_assignment=True)

    @field_validator("JWT_SECRET")
    @classmethod
    def _secret_long_enough(cls, value: SecretStr) -> SecretStr:
        if len(value.get_secret_value()) < MIN_SECRET_LENGTH:
            raise ValueError(f"JWT_SECRET must be at least {MIN_SECRET_LENGTH} characters")
        return value

    @field_validator("OPENAI_BASE_URL")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CLIENT_URL.split(",") if origin.strip()]

    def openai_key(self) -> Optional[str]:
        """Return the configured provider key, ignoring well-known placeholders."""

        if self.OPENAI_API_KEY is None:
            return None
        value = self.OPENAI_API_KEY.get_secret_value().strip()
        if value in PLACEHOLDER_KEYS:
            return None
        return value

    def wants_stub_provider(self) -> bool:
        if self.AI_PROVIDER == "stub":
            return True
        if self.AI_PROVIDER == "openai":
            return False
        return self.openai_key() is None


def load_settings(**overrides: object) -> Settings:
    """Build and validate settings; raises ``pydantic.ValidationError`` on bad config."""

    return Settings(**overrides)  # type: ignore[arg-type]
