"""Async SQLAlchemy engine, session factory and shared column types.

Uses psycopg3 which supports both sync and async with the same
``postgresql+psycopg://`` URL.  Each service owns its own database and its
own declarative ``Base``; only the plumbing lives here.
"""

from __future__ import annotations

from datetime import datetime

from loguru import logger
from sqlalchemy import DateTime, MetaData, text
from sqlalchemy.engine import Dialect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.types import TypeDecorator

from switchboard.shared.clock import as_utc

# Deterministic constraint names so Alembic revisions stay stable.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def make_metadata() -> MetaData:
    return MetaData(naming_convention=NAMING_CONVENTION)


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware timestamp that always round-trips as UTC.

    PostgreSQL returns ``timestamptz`` values in the session time zone and
    SQLite drops the offset entirely; both are normalised on the way out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        return as_utc(value)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        return as_utc(value)


def create_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """Create an async SQLAlchemy engine with production-ready pool settings.

    - **pool_size=5** / **max_overflow=10**: small services, bursty traffic.
    - **pool_pre_ping=True**: survive PG restarts and idle disconnects.
    - **pool_recycle=3600**: recycle connections after an hour.

    Pool parameters only apply to server databases; SQLite URLs get the
    dialect defaults.  All defaults can be overridden via *kwargs*.
    """
    defaults: dict[str, object] = {"echo": False, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        defaults.update(pool_size=5, max_overflow=10, pool_recycle=3600)
    defaults.update(kwargs)
    return create_async_engine(database_url, **defaults)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to *engine*.

    ``expire_on_commit=False`` so that ORM instances remain usable after
    commit without triggering lazy loads (implicit IO is forbidden in async code).
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def ping(session_factory: async_sessionmaker[AsyncSession] | None) -> bool:
    """Return True when the database answers ``SELECT 1``."""
    if session_factory is None:
        return False
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        logger.warning("Database readiness check failed: {}", exc)
        return False
    return True


def normalize_sync_url(database_url: str) -> str:
    """Return a URL usable by Alembic's synchronous engine."""
    return database_url.replace("postgresql+asyncpg://", "postgresql+psycopg://").replace(
        "sqlite+aiosqlite://", "sqlite://"
    )
