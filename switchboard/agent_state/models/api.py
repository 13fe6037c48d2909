"""API request / response schemas for the agent-state endpoints.

The event payload (``AgentEvent``) and the serialized agent
(``AgentRecord``) are wire contracts shared with the interaction service
and live in ``switchboard.shared.contracts``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from switchboard.shared.contracts import AgentState


class AgentCreate(BaseModel):
    """Input for creating the agent bound to an identity."""

    identity_id: int
    name: str | None = Field(default=None, description="Display name; defaults to the identity's username.")
    initial_state: AgentState = AgentState.AVAILABLE


class EventAck(BaseModel):
    message: str = "Event processed successfully"
