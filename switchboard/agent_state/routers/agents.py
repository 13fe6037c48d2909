"""Agent endpoints (RPC-style).

Thin HTTP adapter -- delegates to the agents manager.  Creation is
admin-only; reads need any authenticated caller.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from switchboard.agent_state.managers import agents
from switchboard.agent_state.models.api import AgentCreate
from switchboard.shared.contracts import AgentRecord
from switchboard.shared.deps import AdminCaller, BearerToken, Caller, DbSession, Verifier
from switchboard.shared.errors import NotFoundError

router = APIRouter(prefix="/agents", tags=["agents"])


@router.post("/create", response_model=AgentRecord, status_code=status.HTTP_201_CREATED)
async def handle_create_agent(
    body: AgentCreate,
    db: DbSession,
    token: BearerToken,
    verifier: Verifier,
    _admin: AdminCaller,
) -> AgentRecord:
    """Create the agent for an existing identity."""
    identity = await verifier.lookup_identity(body.identity_id, token)
    if identity is None:
        raise NotFoundError(f"Identity {body.identity_id} not found.")

    agent = await agents.create_agent(
        db,
        identity_id=identity.id,
        name=body.name or identity.username,
        initial_state=body.initial_state,
    )
    return AgentRecord.model_validate(agent)


@router.get("/list", response_model=list[AgentRecord])
async def handle_list_agents(db: DbSession, _caller: Caller) -> list[AgentRecord]:
    """List all agents ordered by name."""
    return [AgentRecord.model_validate(agent) for agent in await agents.list_agents(db)]


@router.get("/{agent_id}/get", response_model=AgentRecord)
async def handle_get_agent(agent_id: int, db: DbSession, _caller: Caller) -> AgentRecord:
    return AgentRecord.model_validate(await agents.get_agent(db, agent_id))


@router.get("/by-identity/{identity_id}/get", response_model=AgentRecord)
async def handle_get_agent_by_identity(identity_id: int, db: DbSession, _caller: Caller) -> AgentRecord:
    """Get the agent owned by an identity."""
    return AgentRecord.model_validate(await agents.get_agent_by_identity(db, identity_id))
