"""Shared test fixtures.

Unit and HTTP tests run against in-memory SQLite (aiosqlite), one engine per
service schema.  Identity lookups go through ``FakeVerifier`` instead of the
real identity service.

Integration tests use a real PostgreSQL container managed by
testcontainers-python, migrated with each service's packaged Alembic
config.  Requires Docker; such tests are marked ``@pytest.mark.integration``.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from testcontainers.postgres import PostgresContainer

from switchboard.agent_state.db.tables import Base as AgentStateBase
from switchboard.agent_state.settings import get_settings as get_state_settings
from switchboard.interaction.db.tables import Base as InteractionBase
from switchboard.interaction.settings import get_settings as get_interaction_settings
from switchboard.shared.db import create_session_factory
from tests.helpers import FakeVerifier

PACKAGE_ROOT = Path(__file__).parent.parent / "switchboard"


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()


# ---------------------------------------------------------------------------
# SQLite: one in-memory database per service schema
# ---------------------------------------------------------------------------


async def _sqlite_engine(metadata: MetaData) -> AsyncEngine:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    return engine


@pytest.fixture
async def state_session() -> AsyncIterator[AsyncSession]:
    """Session on a fresh agent-state schema."""
    engine = await _sqlite_engine(AgentStateBase.metadata)
    async with create_session_factory(engine)() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def interaction_session() -> AsyncIterator[AsyncSession]:
    """Session on a fresh skill-catalog schema."""
    engine = await _sqlite_engine(InteractionBase.metadata)
    async with create_session_factory(engine)() as session:
        yield session
    await engine.dispose()


# ---------------------------------------------------------------------------
# Integration: PostgreSQL container with both services' migrations applied
# ---------------------------------------------------------------------------


def _set_env(key: str, value: str) -> None:
    """Set an env var and invalidate the settings caches."""
    os.environ[key] = value
    get_state_settings.cache_clear()
    get_interaction_settings.cache_clear()


@pytest.fixture(scope="session")
def pg_container() -> Iterator[PostgresContainer]:
    """Start a PostgreSQL 17 container for the test session."""
    with PostgresContainer(
        image="postgres:17",
        username="test",
        password="test",
        dbname="switchboard_test",
        driver="psycopg",
    ) as pg:
        yield pg


@pytest.fixture(scope="session")
def pg_url(pg_container: PostgresContainer) -> str:
    """PostgreSQL URL (psycopg3 dialect) with both services' migrations applied.

    The two services share the container database in tests; their tables do
    not overlap.
    """
    url = pg_container.get_connection_url()
    _set_env("SWITCHBOARD_STATE_DATABASE_URL", url)
    _set_env("SWITCHBOARD_INTERACTION_DATABASE_URL", url)

    from alembic import command
    from alembic.config import Config

    for service in ("agent_state", "interaction"):
        cfg = Config(str(PACKAGE_ROOT / service / "alembic.ini"))
        cfg.attributes["configure_logger"] = False
        command.upgrade(cfg, "head")

    return url


@pytest.fixture(scope="session")
def async_engine(pg_url: str) -> Iterator[AsyncEngine]:
    """Session-scoped async SQLAlchemy engine."""
    engine = create_async_engine(pg_url)
    yield engine
    engine.sync_engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Async SQLAlchemy session; all changes rolled back after the test.

    Uses ``join_transaction_mode="create_savepoint"`` so that session.commit()
    inside tested code only commits a savepoint, while the outer transaction
    is rolled back at teardown.
    """
    async with async_engine.connect() as conn:
        await conn.begin()
        session = AsyncSession(bind=conn, join_transaction_mode="create_savepoint", expire_on_commit=False)
        yield session
        await session.close()
        await conn.rollback()
