"""Shared fixtures for agent-state API tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from switchboard.agent_state.app import app
from switchboard.shared.deps import get_db
from tests.helpers import FakeVerifier


@pytest.fixture
async def client(state_session: AsyncSession, verifier: FakeVerifier) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the registry app with a test DB session.

    Overrides ``get_db`` so every request uses the in-memory ``state_session``
    fixture.  The app lifespan does NOT run under ``ASGITransport``, so the
    state fields are pre-set here.
    """

    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        yield state_session

    app.dependency_overrides[get_db] = _override_get_db

    app.state.db_engine = None
    app.state.db_session_factory = None
    app.state.verifier = verifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
