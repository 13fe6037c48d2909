"""Alembic migration environment for the agent-state database.

Reads the database URL from AgentStateSettings
(SWITCHBOARD_STATE_DATABASE_URL).
"""

from __future__ import annotations

from switchboard.agent_state.db.tables import Base
from switchboard.agent_state.settings import AgentStateSettings
from switchboard.shared.migrations import run_migrations

run_migrations(
    Base.metadata,
    AgentStateSettings().database_url,
    env_var="SWITCHBOARD_STATE_DATABASE_URL",
    version_table="alembic_version_agent_state",
)
