"""Alembic migration environment for the interaction database.

Reads the database URL from InteractionSettings
(SWITCHBOARD_INTERACTION_DATABASE_URL).
"""

from __future__ import annotations

from switchboard.interaction.db.tables import Base
from switchboard.interaction.settings import InteractionSettings
from switchboard.shared.migrations import run_migrations

run_migrations(
    Base.metadata,
    InteractionSettings().database_url,
    env_var="SWITCHBOARD_INTERACTION_DATABASE_URL",
    version_table="alembic_version_interaction",
)
