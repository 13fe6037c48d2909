"""Test doubles shared by the agent-state and interaction test suites."""

from __future__ import annotations

from datetime import datetime

from switchboard.shared.clock import utcnow
from switchboard.shared.contracts import AgentEvent, AgentRecord, AgentState
from switchboard.shared.errors import NotFoundError, SwitchboardError
from switchboard.shared.identity import Identity

AGENT_TOKEN = "agent-token"
ADMIN_TOKEN = "admin-token"

AGENT_IDENTITY = Identity(id=42, username="alice", email="alice@example.com", is_admin=False)
ADMIN_IDENTITY = Identity(id=1, username="root", email="root@example.com", is_admin=True)


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class FakeVerifier:
    """In-memory ``CredentialVerifier``: a fixed token -> identity table."""

    def __init__(self, tokens: dict[str, Identity] | None = None, *, healthy: bool = True) -> None:
        if tokens is None:
            tokens = {AGENT_TOKEN: AGENT_IDENTITY, ADMIN_TOKEN: ADMIN_IDENTITY}
        self.tokens = dict(tokens)
        self.directory = {identity.id: identity for identity in self.tokens.values()}
        self.healthy = healthy
        self.calls: list[str] = []

    async def who_am_i(self, token: str) -> Identity | None:
        self.calls.append(token)
        return self.tokens.get(token)

    async def lookup_identity(self, identity_id: int, token: str) -> Identity | None:
        if token not in self.tokens:
            return None
        return self.directory.get(identity_id)

    async def is_healthy(self) -> bool:
        return self.healthy


class FakeAgentStateClient:
    """In-memory ``AgentStateClient`` that records every forwarded event."""

    def __init__(self, agents: dict[int, AgentRecord] | None = None, *, healthy: bool = True) -> None:
        self.agents = dict(agents or {})
        self.healthy = healthy
        self.events: list[tuple[AgentEvent, str]] = []
        self.lookups: list[tuple[int, str]] = []
        self.error: SwitchboardError | None = None

    async def apply_event(self, event: AgentEvent, token: str) -> None:
        self.events.append((event, token))
        if self.error is not None:
            raise self.error

    async def get_agent_by_identity(self, identity_id: int, token: str) -> AgentRecord:
        self.lookups.append((identity_id, token))
        agent = self.agents.get(identity_id)
        if agent is None:
            msg = f"Agent not found for identity {identity_id}."
            raise NotFoundError(msg)
        return agent

    async def is_healthy(self) -> bool:
        return self.healthy


def agent_record(
    *,
    agent_id: int = 7,
    identity_id: int = AGENT_IDENTITY.id,
    name: str = "alice",
    state: AgentState = AgentState.AVAILABLE,
    last_state_change: datetime | None = None,
) -> AgentRecord:
    return AgentRecord(
        id=agent_id,
        name=name,
        identity_id=identity_id,
        state=state,
        last_state_change=last_state_change or utcnow(),
    )
