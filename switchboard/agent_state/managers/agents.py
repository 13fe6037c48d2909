"""Agent registry operations.

``apply_event`` is the only mutating path after creation: it runs the
freshness guard, replaces skills when the event carries them, computes the
next state and persists state and timestamp in one write.
"""

from __future__ import annotations

from datetime import datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from switchboard.agent_state.db.tables import Agent
from switchboard.agent_state.state_machine import is_stale, next_state
from switchboard.shared.clock import utcnow
from switchboard.shared.contracts import AgentEvent, AgentState, dump_skills
from switchboard.shared.errors import ConflictError, NotFoundError, StaleEventError, UnknownEventTypeError


class AgentNotFoundError(NotFoundError):
    """Raised when no agent matches the requested id or identity."""


class DuplicateAgentError(ConflictError):
    """Raised when the identity already owns an agent or the name is taken."""


async def apply_event(db: AsyncSession, event: AgentEvent, *, now: datetime | None = None) -> Agent:
    """Apply *event* to its target agent and return the updated row.

    Raises ``StaleEventError`` before touching the database when the event is
    older than the freshness window, ``AgentNotFoundError`` for an unknown
    agent and ``UnknownEventTypeError`` when the event has no transition.

    Skills carried by the event are stored even when the transition then
    fails with ``UnknownEventTypeError``; only the state write is skipped.
    """
    if is_stale(event.timestamp, now=now):
        msg = f"Event timestamp {event.timestamp.isoformat()} is too old. Events must be within the hour."
        raise StaleEventError(msg)

    agent = await db.get(Agent, event.agent_id)
    if agent is None:
        logger.warning("Agent {} not found for event {}", event.agent_id, event.event_type)
        msg = f"Agent with ID {event.agent_id} not found."
        raise AgentNotFoundError(msg)

    if event.skills:
        agent.skills = dump_skills(event.skills)

    new_state = next_state(AgentState(agent.state), event.event_type, event.timestamp)
    if new_state is None:
        if event.skills:
            await db.commit()
            logger.info("Stored skills for agent {} from untransitioned event {}", agent.id, event.event_type)
        msg = f"Unknown event type: {event.event_type}"
        raise UnknownEventTypeError(msg)

    agent.state = new_state
    agent.last_state_change = event.timestamp
    await db.commit()

    logger.info("Processed event {} for agent {} (state={})", event.event_type, event.agent_id, new_state)
    return agent


async def create_agent(
    db: AsyncSession,
    *,
    identity_id: int,
    name: str,
    initial_state: AgentState = AgentState.AVAILABLE,
) -> Agent:
    """Create the agent owned by *identity_id* with an empty skill set.

    Raises ``DuplicateAgentError`` if the identity already owns an agent or
    another agent already uses *name*.
    """
    existing = await find_agent_by_identity(db, identity_id)
    if existing is not None:
        msg = f"Agent already exists for identity {identity_id}"
        raise DuplicateAgentError(msg)

    agent = Agent(
        name=name,
        identity_id=identity_id,
        state=initial_state,
        last_state_change=utcnow(),
        skills=None,
    )
    db.add(agent)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        msg = f"Agent name '{name}' or identity {identity_id} is already registered"
        raise DuplicateAgentError(msg) from None
    await db.refresh(agent)

    logger.info("Created agent {} with ID {} for identity {}", agent.name, agent.id, agent.identity_id)
    return agent


async def get_agent(db: AsyncSession, agent_id: int) -> Agent:
    """Get an agent by id.  Raises ``AgentNotFoundError`` if missing."""
    agent = await db.get(Agent, agent_id)
    if agent is None:
        msg = f"Agent with ID {agent_id} not found."
        raise AgentNotFoundError(msg)
    return agent


async def find_agent_by_identity(db: AsyncSession, identity_id: int) -> Agent | None:
    result = await db.execute(select(Agent).where(Agent.identity_id == identity_id))
    return result.scalar_one_or_none()


async def get_agent_by_identity(db: AsyncSession, identity_id: int) -> Agent:
    """Get the agent owned by *identity_id*.  Raises ``AgentNotFoundError`` if none."""
    agent = await find_agent_by_identity(db, identity_id)
    if agent is None:
        msg = f"Agent not found for identity {identity_id}."
        raise AgentNotFoundError(msg)
    return agent


async def list_agents(db: AsyncSession) -> list[Agent]:
    """List all agents ordered by name."""
    result = await db.execute(select(Agent).order_by(Agent.name))
    return list(result.scalars().all())
