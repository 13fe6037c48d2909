"""Skill catalog CRUD endpoints (RPC-style).

All write operations use POST and require the admin role; reads are open.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from switchboard.interaction.managers import skills
from switchboard.interaction.models.api import ApiResponse, SkillCreate, SkillResponse, SkillUpdate
from switchboard.shared.deps import AdminCaller, DbSession

router = APIRouter(prefix="/skills", tags=["skills"])


@router.get("/list", response_model=ApiResponse[list[SkillResponse]])
async def list_skills(
    db: DbSession,
    active_only: bool = Query(False, description="Only return active skills."),
) -> ApiResponse[list[SkillResponse]]:
    rows = await skills.list_skills(db, active_only=active_only)
    return ApiResponse[list[SkillResponse]].ok(
        f"Retrieved {len(rows)} skills",
        [SkillResponse.model_validate(row) for row in rows],
    )


@router.get("/names", response_model=ApiResponse[list[str]])
async def resolve_skill_names(
    db: DbSession,
    ids: list[str] = Query([], description="Skill ids to resolve."),
) -> ApiResponse[list[str]]:
    """Names of the active skills among *ids*; unknown or inactive ids are skipped."""
    names = await skills.resolve_skill_names(db, ids)
    return ApiResponse[list[str]].ok(f"Resolved {len(names)} skill names", names)


@router.get("/{skill_id}/get", response_model=ApiResponse[SkillResponse])
async def get_skill(skill_id: int, db: DbSession) -> ApiResponse[SkillResponse]:
    skill = await skills.get_skill(db, skill_id)
    return ApiResponse[SkillResponse].ok("Skill retrieved successfully", SkillResponse.model_validate(skill))


@router.post("/create", response_model=ApiResponse[SkillResponse], status_code=status.HTTP_201_CREATED)
async def create_skill(body: SkillCreate, db: DbSession, _admin: AdminCaller) -> ApiResponse[SkillResponse]:
    """Create an active skill.  Names are unique, ignoring case."""
    skill = await skills.create_skill(db, name=body.name, description=body.description)
    return ApiResponse[SkillResponse].ok("Skill created successfully", SkillResponse.model_validate(skill))


@router.post("/{skill_id}/update", response_model=ApiResponse[SkillResponse])
async def update_skill(
    skill_id: int,
    body: SkillUpdate,
    db: DbSession,
    _admin: AdminCaller,
) -> ApiResponse[SkillResponse]:
    skill = await skills.update_skill(
        db,
        skill_id,
        name=body.name,
        description=body.description,
        is_active=body.is_active,
    )
    return ApiResponse[SkillResponse].ok("Skill updated successfully", SkillResponse.model_validate(skill))


@router.post("/{skill_id}/toggle", response_model=ApiResponse[SkillResponse])
async def toggle_skill(skill_id: int, db: DbSession, _admin: AdminCaller) -> ApiResponse[SkillResponse]:
    skill = await skills.toggle_skill(db, skill_id)
    return ApiResponse[SkillResponse].ok("Skill status toggled successfully", SkillResponse.model_validate(skill))


@router.post("/{skill_id}/delete", response_model=ApiResponse[None])
async def delete_skill(skill_id: int, db: DbSession, _admin: AdminCaller) -> ApiResponse[None]:
    await skills.delete_skill(db, skill_id)
    return ApiResponse[None].ok("Skill deleted successfully")
