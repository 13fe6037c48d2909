"""Interaction service configuration loaded from SWITCHBOARD_INTERACTION_* variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class InteractionSettings(BaseSettings):
    """Interaction orchestrator settings.

    Read from environment variables with the ``SWITCHBOARD_INTERACTION_``
    prefix.  The orchestrator owns the skill catalog database and talks to
    two remote services: the identity service and the agent-state registry.
    """

    model_config = SettingsConfigDict(
        env_prefix="SWITCHBOARD_INTERACTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"

    database_url: str | None = None
    """PostgreSQL connection string for the skill catalog."""

    identity_url: str = "http://auth-service:8080"
    agent_state_url: str = "http://agent-state-api:8080"
    http_timeout: float = 10.0

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8002


@lru_cache(maxsize=1)
def get_settings() -> InteractionSettings:
    """Return a cached settings instance (``get_settings.cache_clear()`` resets it)."""
    return InteractionSettings()
