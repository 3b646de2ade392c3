"""
Application configuration via environment variables.

Uses Pydantic BaseSettings to load and validate all config from env vars
or a .env.local file. Every setting has a sensible default for local
development so the parser can run with no configuration at all; the
generative fallback simply stays disabled until an API key is set.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment selector."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Central configuration for the CallPad smart-input service.

    Values are loaded from environment variables first, falling back
    to a `.env.local` file in the project root. Secrets should NEVER
    be committed; use `.env.example` as the template.
    """

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Environment ──────────────────────────────────────────────
    environment: Environment = Environment.DEVELOPMENT

    # ── Fallback classifier (OpenAI-compatible chat API) ─────────
    openai_api_key: str = Field(default="", description="API key for the fallback model")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the chat completions API",
    )
    fallback_model: str = Field(default="gpt-4o-mini", description="Model used for unresolved fragments")
    fallback_timeout_seconds: float = Field(default=30.0, gt=0, le=120, description="Per-call HTTP timeout")
    fallback_max_tokens: int = Field(default=500, ge=50, le=4000, description="Completion token cap")
    fallback_min_fragment_length: int = Field(
        default=4,
        ge=1,
        description="Fragments shorter than this are never sent to the model",
    )

    # ── Chip workflow ────────────────────────────────────────────
    auto_populate_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Confidence at or above which a chip is applied without review",
    )
    debounce_seconds: float = Field(default=0.6, ge=0.0, le=10.0, description="Live typing debounce")
    session_idle_timeout_seconds: int = Field(
        default=1800, ge=1, description="HTTP chip sessions untouched this long are closed and dropped"
    )

    # ── Gazetteer overrides ──────────────────────────────────────
    agent_roster: list[str] = Field(
        default_factory=list,
        description="Dispatcher agent first names; empty uses the built-in roster",
    )

    # ── Feature Flags ────────────────────────────────────────────
    feature_ai_fallback: bool = Field(default=True, description="Allow useAI requests to reach the model")

    # ── API limits ───────────────────────────────────────────────
    rate_limit_window_seconds: int = Field(default=60, ge=1, description="Rate limit window")
    rate_limit_max_requests: int = Field(default=300, ge=1, description="Requests per window per IP")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Root log level")

    # ── Derived helpers ──────────────────────────────────────────

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def fallback_enabled(self) -> bool:
        return self.feature_ai_fallback and bool(self.openai_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached Settings instance.

    Using lru_cache ensures we read env vars exactly once, and every
    module that calls ``get_settings()`` gets the same object.
    """
    return Settings()
