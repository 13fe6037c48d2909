"""Interaction manager -- turns caller actions into registry events.

The InteractionManager is a process-level singleton initialised in the app
lifespan.  It coordinates three collaborators:

- **Credential verifier**: who the caller's bearer token belongs to
- **Skill catalog**: local database, validates referenced skill ids
- **Agent state client**: the remote registry that applies the event

Individual methods accept an ``AsyncSession`` (DB) parameter so that database
access follows FastAPI's per-request dependency injection pattern.  The
caller's token is threaded through explicitly and forwarded unchanged.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from loguru import logger

from switchboard.interaction.managers import skills
from switchboard.interaction.models.api import ActivityConfirmation, SkillsConfirmation
from switchboard.shared.clock import utcnow
from switchboard.shared.contracts import AgentEvent
from switchboard.shared.errors import NotFoundError, UnauthenticatedError, UnknownEventTypeError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from switchboard.interaction.clients import AgentStateClient
    from switchboard.shared.identity import CredentialVerifier

SKILLS_UPDATE_EVENT = "SKILLS_UPDATE"
"""Event type used for skill-only updates.  It has no state transition, so
the registry stores the skills and then reports ``unknown_event_type``."""


class InteractionManager:
    """Validates and forwards agent activity to the agent-state registry.

    No retries: a registry failure is surfaced to the caller as-is.
    """

    def __init__(self, agent_state: AgentStateClient, verifier: CredentialVerifier) -> None:
        self._agent_state = agent_state
        self._verifier = verifier

    # -- Agent actions -----------------------------------------------------------

    async def handle_action(
        self,
        db: AsyncSession,
        token: str | None,
        *,
        action: str,
        timestamp: datetime,
        skill_ids: list[str] | None = None,
    ) -> ActivityConfirmation:
        """Apply *action* to the agent owned by the token's identity.

        Raises ``UnauthenticatedError`` without a token, ``NotFoundError`` when
        the token cannot be resolved to an identity, ``InvalidSkillError``
        before any remote call when a skill id is unknown, and whatever the
        registry reports otherwise.
        """
        if not token:
            raise UnauthenticatedError("Authorization token required")

        identity = await self._verifier.who_am_i(token)
        if identity is None:
            raise NotFoundError("Agent not found")

        skill_ids = list(skill_ids or [])
        await skills.validate_skill_ids(db, skill_ids)

        agent = await self._agent_state.get_agent_by_identity(identity.id, token)
        return await self._forward(token, agent_id=agent.id, action=action, timestamp=timestamp, skill_ids=skill_ids)

    # -- Admin actions -----------------------------------------------------------

    async def update_agent_activity(
        self,
        db: AsyncSession,
        token: str,
        *,
        agent_id: int,
        action: str,
        timestamp: datetime,
        skill_ids: list[str] | None = None,
    ) -> ActivityConfirmation:
        """Apply *action* to *agent_id* directly, without identity resolution."""
        skill_ids = list(skill_ids or [])
        await skills.validate_skill_ids(db, skill_ids)
        return await self._forward(token, agent_id=agent_id, action=action, timestamp=timestamp, skill_ids=skill_ids)

    async def update_agent_skills(
        self,
        db: AsyncSession,
        token: str,
        *,
        agent_id: int,
        skill_ids: list[str],
    ) -> SkillsConfirmation:
        """Replace the skill set of *agent_id* without changing its state."""
        await skills.validate_skill_ids(db, skill_ids)

        event = AgentEvent(agent_id=agent_id, event_type=SKILLS_UPDATE_EVENT, timestamp=utcnow(), skills=skill_ids)
        try:
            await self._agent_state.apply_event(event, token)
        except UnknownEventTypeError:
            # Skills are stored before the transition is looked up.
            logger.debug("Registry stored skills for agent {} without a transition", agent_id)

        logger.info("Updated skills for agent {}: {}", agent_id, skill_ids)
        return SkillsConfirmation(agent_id=agent_id, updated_skills=skill_ids)

    # -- Internal ----------------------------------------------------------------

    async def _forward(
        self,
        token: str,
        *,
        agent_id: int,
        action: str,
        timestamp: datetime,
        skill_ids: list[str],
    ) -> ActivityConfirmation:
        event = AgentEvent(agent_id=agent_id, event_type=action, timestamp=timestamp, skills=skill_ids)
        await self._agent_state.apply_event(event, token)

        logger.info("Updated activity for agent {} with action {}", agent_id, action)
        return ActivityConfirmation(
            agent_id=agent_id,
            action=action,
            timestamp=event.timestamp,
            skills=skill_ids,
        )
