"""Event endpoint: the registry's single mutating entry point."""

from __future__ import annotations

from fastapi import APIRouter

from switchboard.agent_state.managers import agents
from switchboard.agent_state.models.api import EventAck
from switchboard.shared.contracts import AgentEvent
from switchboard.shared.deps import Caller, DbSession

router = APIRouter(prefix="/events", tags=["events"])


@router.post("/apply", response_model=EventAck)
async def handle_apply_event(body: AgentEvent, db: DbSession, _caller: Caller) -> EventAck:
    """Apply an agent event under the freshness guard."""
    await agents.apply_event(db, body)
    return EventAck()
