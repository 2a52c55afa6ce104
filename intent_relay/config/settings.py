"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).

The only feature switch is `GEMINI_API_KEY`: when it is absent the intent parser silently uses
the rules-based fallback. Outbound timeouts are always bounded.
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY", repr=False)
    llm_model: str = Field(default="gemini-1.5-flash", alias="LLM_MODEL")
    llm_api_base: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="LLM_API_BASE",
    )
    llm_timeout_s: float = Field(default=15.0, alias="LLM_TIMEOUT_S")

    anthropic_api_key: str | None = Field(default=None, alias="ANTHROPIC_API_KEY", repr=False)
    anthropic_api_url: str = Field(
        default="https://api.anthropic.com/v1/messages",
        alias="ANTHROPIC_API_URL",
    )
    anthropic_version: str = Field(default="2023-06-01", alias="ANTHROPIC_VERSION")

    tavily_api_key: str | None = Field(default=None, alias="TAVILY_API_KEY", repr=False)
    tavily_api_url: str = Field(default="https://api.tavily.com/search", alias="TAVILY_API_URL")

    upstream_timeout_s: float = Field(default=15.0, alias="UPSTREAM_TIMEOUT_S")

    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")
    max_body_bytes: int = Field(default=50 * 1024 * 1024, alias="MAX_BODY_BYTES")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")

    @field_validator("llm_timeout_s", "upstream_timeout_s", "max_body_bytes")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        """Reject zero/negative timeouts and body limits (an unbounded wait is never intended)."""

        if value <= 0:
            raise ValueError("must be positive")
        return value

    @property
    def llm_enabled(self) -> bool:
        """Whether the model-backed intent strategy is attempted."""

        return bool(self.gemini_api_key)

    @property
    def cors_origins(self) -> list[str]:
        """CORS origins parsed from the comma-separated `CORS_ALLOW_ORIGINS`."""

        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        # Raising here is fine: caller can decide how to handle startup errors.
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
