"""SQLAlchemy ORM models for the agent-state database.

Single source of truth for the registry schema; Alembic reads
``Base.metadata`` to autogenerate revisions.  SQLAlchemy 2.0 declarative
style with ``Mapped`` annotations.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from switchboard.shared.contracts import AgentState
from switchboard.shared.db import UTCDateTime, make_metadata


class Base(DeclarativeBase):
    """Declarative base with naming convention for constraints."""

    metadata = make_metadata()


class Agent(Base):
    __tablename__ = "agents"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(unique=True)
    identity_id: Mapped[int] = mapped_column(unique=True)
    """Soft reference to the identity service's user id."""

    state: Mapped[str] = mapped_column(default=AgentState.AVAILABLE, server_default=AgentState.AVAILABLE.value)
    last_state_change: Mapped[datetime] = mapped_column(UTCDateTime)
    skills: Mapped[str | None] = mapped_column(Text)
    """Compact JSON array of skill ids, e.g. ``["1","4"]``."""
