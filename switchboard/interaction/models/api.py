"""API request / response schemas for the interaction endpoints.

Every interaction endpoint answers with an ``ApiResponse`` envelope, success
or failure alike::

    {"success": true, "message": "...", "error": null, "data": {...}}
    {"success": false, "message": "...", "error": "invalid_skill", "data": null}
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from switchboard.interaction.db.tables import SKILL_DESCRIPTION_MAX_LENGTH, SKILL_NAME_MAX_LENGTH
from switchboard.shared.clock import as_utc
from switchboard.shared.errors import ErrorKind

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool
    message: str
    error: ErrorKind | None = None
    data: DataT | None = None

    @classmethod
    def ok(cls, message: str, data: DataT | None = None) -> ApiResponse[DataT]:
        return cls(success=True, message=message, data=data)


# -- Interactions --------------------------------------------------------------


class InteractionRequest(BaseModel):
    """Body of the agent-facing interaction endpoints."""

    timestamp: datetime
    skill_ids: list[str] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)


class AdminActivityRequest(InteractionRequest):
    """Activity update submitted by an administrator for any agent."""

    agent_id: int
    action: str = Field(description="Event type, e.g. START_DO_NOT_DISTURB or CALL_STARTED.")


class AgentSkillsRequest(BaseModel):
    skill_ids: list[str] = Field(min_length=1)


class ActivityConfirmation(BaseModel):
    """The event facts that were forwarded to the registry."""

    agent_id: int
    action: str
    timestamp: datetime
    skills: list[str]


class SkillsConfirmation(BaseModel):
    agent_id: int
    updated_skills: list[str]


# -- Skills --------------------------------------------------------------------


class SkillCreate(BaseModel):
    name: str = Field(min_length=1, max_length=SKILL_NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=SKILL_DESCRIPTION_MAX_LENGTH)


class SkillUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=SKILL_NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=SKILL_DESCRIPTION_MAX_LENGTH)
    is_active: bool | None = None


class SkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    is_active: bool
    created_at: datetime
