"""Agent-state service configuration loaded from SWITCHBOARD_STATE_* variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AgentStateSettings(BaseSettings):
    """Agent registry settings.

    All fields are read from environment variables with the
    ``SWITCHBOARD_STATE_`` prefix, e.g. ``SWITCHBOARD_STATE_LOG_LEVEL=DEBUG``
    maps to ``log_level``.  The settings object is built once at startup and
    handed to the components that need it.
    """

    model_config = SettingsConfigDict(
        env_prefix="SWITCHBOARD_STATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Infrastructure --------------------------------------------------------
    database_url: str | None = None
    """PostgreSQL connection string (``postgresql+psycopg://``)."""

    # -- Collaborators ---------------------------------------------------------
    identity_url: str = "http://auth-service:8080"
    """Base URL of the identity service (token and identity lookups)."""

    http_timeout: float = 10.0
    """Per-request timeout in seconds for outbound calls."""

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8001


@lru_cache(maxsize=1)
def get_settings() -> AgentStateSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return AgentStateSettings()
