"""Administrator endpoints: act on any agent by id."""

from __future__ import annotations

from fastapi import APIRouter

from switchboard.interaction.deps import InteractionMgr
from switchboard.interaction.models.api import (
    ActivityConfirmation,
    AdminActivityRequest,
    AgentSkillsRequest,
    ApiResponse,
    SkillsConfirmation,
)
from switchboard.shared.deps import AdminCaller, BearerToken, DbSession

router = APIRouter(prefix="/admin/agents", tags=["admin"])


@router.post("/activity", response_model=ApiResponse[ActivityConfirmation])
async def update_agent_activity(
    body: AdminActivityRequest,
    db: DbSession,
    token: BearerToken,
    manager: InteractionMgr,
    _admin: AdminCaller,
) -> ApiResponse[ActivityConfirmation]:
    confirmation = await manager.update_agent_activity(
        db,
        token,
        agent_id=body.agent_id,
        action=body.action,
        timestamp=body.timestamp,
        skill_ids=body.skill_ids,
    )
    return ApiResponse[ActivityConfirmation].ok("Agent activity updated successfully", confirmation)


@router.post("/{agent_id}/skills", response_model=ApiResponse[SkillsConfirmation])
async def update_agent_skills(
    agent_id: int,
    body: AgentSkillsRequest,
    db: DbSession,
    token: BearerToken,
    manager: InteractionMgr,
    _admin: AdminCaller,
) -> ApiResponse[SkillsConfirmation]:
    """Replace an agent's skill set; its state is left as it is."""
    confirmation = await manager.update_agent_skills(db, token, agent_id=agent_id, skill_ids=body.skill_ids)
    return ApiResponse[SkillsConfirmation].ok("Agent skills updated successfully", confirmation)
