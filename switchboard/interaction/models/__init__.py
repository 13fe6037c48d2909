"""Data models for the interaction service."""

from switchboard.interaction.models.api import (
    ActivityConfirmation,
    AdminActivityRequest,
    AgentSkillsRequest,
    ApiResponse,
    InteractionRequest,
    SkillCreate,
    SkillResponse,
    SkillsConfirmation,
    SkillUpdate,
)

__all__ = [
    "ActivityConfirmation",
    "AdminActivityRequest",
    "AgentSkillsRequest",
    "ApiResponse",
    "InteractionRequest",
    "SkillCreate",
    "SkillResponse",
    "SkillUpdate",
    "SkillsConfirmation",
]
