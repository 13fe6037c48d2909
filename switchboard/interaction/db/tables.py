"""SQLAlchemy ORM models for the interaction database (the skill catalog)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, func, true
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from switchboard.shared.db import UTCDateTime, make_metadata

SKILL_NAME_MAX_LENGTH = 100
SKILL_DESCRIPTION_MAX_LENGTH = 500


class Base(DeclarativeBase):
    """Declarative base with naming convention for constraints."""

    metadata = make_metadata()


class Skill(Base):
    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(SKILL_NAME_MAX_LENGTH), unique=True)
    description: Mapped[str | None] = mapped_column(String(SKILL_DESCRIPTION_MAX_LENGTH))
    is_active: Mapped[bool] = mapped_column(default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, server_default=func.now())
