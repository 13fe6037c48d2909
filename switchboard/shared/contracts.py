"""Wire contracts exchanged between the interaction and agent-state services.

These models are the only shapes that cross the service boundary:

- ``AgentEvent`` is what the orchestrator produces and the registry applies.
- ``AgentRecord`` is the registry's serialized agent.
- ``ErrorBody`` is the registry's structured failure body.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from switchboard.shared.clock import as_utc


class AgentState(StrEnum):
    """Caller-visible agent states (values are the enum names verbatim)."""

    AVAILABLE = "AVAILABLE"
    ON_CALL = "ON_CALL"
    DO_NOT_DISTURB = "DO_NOT_DISTURB"
    ON_LUNCH = "ON_LUNCH"


class EventType(StrEnum):
    """The closed vocabulary understood by the transition function."""

    START_DO_NOT_DISTURB = "START_DO_NOT_DISTURB"
    END_DO_NOT_DISTURB = "END_DO_NOT_DISTURB"
    CALL_STARTED = "CALL_STARTED"
    CALL_ENDED = "CALL_ENDED"


class AgentEvent(BaseModel):
    """A timestamped, typed signal that may change an agent's state.

    ``event_type`` is a plain string on purpose: values outside
    ``EventType`` are accepted here and rejected by the registry's
    transition function.
    """

    agent_id: int
    event_type: str
    timestamp: datetime
    skills: list[str] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)


class AgentRecord(BaseModel):
    """Serialized agent returned by the registry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    identity_id: int
    state: AgentState
    last_state_change: datetime
    skills: list[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _decode_skills(cls, value: object) -> object:
        # ORM rows keep skills in their compact JSON string form.
        if value is None:
            return []
        if isinstance(value, str):
            return json.loads(value) if value else []
        return value


class ErrorBody(BaseModel):
    # Unrecognized kinds rebuild as InternalError via error_from_kind.
    kind: str
    message: str


def dump_skills(skills: list[str]) -> str:
    """Serialize a skill list to the compact string stored on the agent row."""
    return json.dumps(skills, separators=(",", ":"))
