"""Agent-facing interaction endpoints (RPC-style).

Each endpoint maps to one registry event type.  The caller is resolved from
the bearer token; the manager reports a missing token as
``unauthenticated`` and an unresolvable one as ``not_found``.
"""

from __future__ import annotations

from fastapi import APIRouter

from switchboard.interaction.deps import InteractionMgr
from switchboard.interaction.models.api import ActivityConfirmation, ApiResponse, InteractionRequest
from switchboard.shared.contracts import EventType
from switchboard.shared.deps import DbSession, OptionalToken

router = APIRouter(prefix="/interactions", tags=["interactions"])

ACTIVITY_UPDATED = "Agent activity updated successfully"


async def _handle(
    action: EventType,
    body: InteractionRequest,
    db: DbSession,
    token: OptionalToken,
    manager: InteractionMgr,
) -> ApiResponse[ActivityConfirmation]:
    confirmation = await manager.handle_action(
        db,
        token,
        action=action,
        timestamp=body.timestamp,
        skill_ids=body.skill_ids,
    )
    return ApiResponse[ActivityConfirmation].ok(ACTIVITY_UPDATED, confirmation)


@router.post("/start-do-not-disturb", response_model=ApiResponse[ActivityConfirmation])
async def start_do_not_disturb(
    body: InteractionRequest,
    db: DbSession,
    token: OptionalToken,
    manager: InteractionMgr,
) -> ApiResponse[ActivityConfirmation]:
    """Enter do-not-disturb (or lunch, between 11:00 and 13:00 UTC)."""
    return await _handle(EventType.START_DO_NOT_DISTURB, body, db, token, manager)


@router.post("/end-do-not-disturb", response_model=ApiResponse[ActivityConfirmation])
async def end_do_not_disturb(
    body: InteractionRequest,
    db: DbSession,
    token: OptionalToken,
    manager: InteractionMgr,
) -> ApiResponse[ActivityConfirmation]:
    return await _handle(EventType.END_DO_NOT_DISTURB, body, db, token, manager)


@router.post("/start-call", response_model=ApiResponse[ActivityConfirmation])
async def start_call(
    body: InteractionRequest,
    db: DbSession,
    token: OptionalToken,
    manager: InteractionMgr,
) -> ApiResponse[ActivityConfirmation]:
    return await _handle(EventType.CALL_STARTED, body, db, token, manager)


@router.post("/end-call", response_model=ApiResponse[ActivityConfirmation])
async def end_call(
    body: InteractionRequest,
    db: DbSession,
    token: OptionalToken,
    manager: InteractionMgr,
) -> ApiResponse[ActivityConfirmation]:
    return await _handle(EventType.CALL_ENDED, body, db, token, manager)
