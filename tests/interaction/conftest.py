"""Shared fixtures for interaction service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from switchboard.interaction.app import app
from switchboard.interaction.db.tables import Skill
from switchboard.interaction.managers.interactions import InteractionManager
from switchboard.shared.deps import get_db
from tests.helpers import AGENT_IDENTITY, FakeAgentStateClient, FakeVerifier, agent_record


@pytest.fixture
def agent_state() -> FakeAgentStateClient:
    """Registry double that knows one agent (id 7) owned by the agent identity."""
    return FakeAgentStateClient({AGENT_IDENTITY.id: agent_record(agent_id=7)})


@pytest.fixture
def manager(agent_state: FakeAgentStateClient, verifier: FakeVerifier) -> InteractionManager:
    return InteractionManager(agent_state=agent_state, verifier=verifier)


@pytest.fixture
async def catalog(interaction_session: AsyncSession) -> list[Skill]:
    """Three catalog skills: two active, one inactive."""
    rows = [
        Skill(name="Billing", description="Invoices and refunds"),
        Skill(name="Spanish"),
        Skill(name="Legacy", is_active=False),
    ]
    interaction_session.add_all(rows)
    await interaction_session.commit()
    for row in rows:
        await interaction_session.refresh(row)
    return rows


@pytest.fixture
async def client(
    interaction_session: AsyncSession,
    verifier: FakeVerifier,
    agent_state: FakeAgentStateClient,
    manager: InteractionManager,
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the interaction app with test doubles.

    The app lifespan does NOT run under ``ASGITransport``, so the state
    fields are pre-set here.
    """

    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        yield interaction_session

    app.dependency_overrides[get_db] = _override_get_db

    app.state.db_engine = None
    app.state.db_session_factory = None
    app.state.verifier = verifier
    app.state.agent_state = agent_state
    app.state.interaction_manager = manager

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
