"""Skill catalog operations.

Skill ids travel as strings between services; the catalog parses them as
integers for lookups.  Anything but plain ASCII digits inside the
primary-key range names no skill.  Validation (``validate_skill_ids``)
accepts any stored skill, active or not, while name resolution only
reports active ones.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from switchboard.interaction.db.tables import Skill
from switchboard.shared.errors import ConflictError, InvalidSkillError, NotFoundError


class SkillNotFoundError(NotFoundError):
    """Raised when no skill matches the requested id."""


class DuplicateSkillError(ConflictError):
    """Raised when a skill name is already taken (case-insensitive)."""


# Skill.id is a 32-bit INTEGER column on PostgreSQL.
MAX_SKILL_ID = 2**31 - 1


def _parse_skill_id(skill_id: str) -> int | None:
    if not (skill_id.isascii() and skill_id.isdigit()):
        return None
    value = int(skill_id)
    if value > MAX_SKILL_ID:
        return None
    return value


async def _ensure_name_available(db: AsyncSession, name: str, *, exclude_id: int | None = None) -> None:
    stmt = select(Skill.id).where(func.lower(Skill.name) == name.lower())
    if exclude_id is not None:
        stmt = stmt.where(Skill.id != exclude_id)
    if (await db.execute(stmt)).first() is not None:
        msg = f"Skill with name '{name}' already exists"
        raise DuplicateSkillError(msg)


async def _commit_or_conflict(db: AsyncSession, name: str) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        msg = f"Skill with name '{name}' already exists"
        raise DuplicateSkillError(msg) from None


# -- Reads ---------------------------------------------------------------------


async def list_skills(db: AsyncSession, *, active_only: bool = False) -> list[Skill]:
    """List skills ordered by name, optionally only the active ones."""
    stmt = select(Skill).order_by(Skill.name)
    if active_only:
        stmt = stmt.where(Skill.is_active.is_(True))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_skill(db: AsyncSession, skill_id: int) -> Skill:
    skill = await db.get(Skill, skill_id)
    if skill is None:
        msg = f"Skill with ID {skill_id} not found"
        raise SkillNotFoundError(msg)
    return skill


async def skill_exists(db: AsyncSession, skill_id: str) -> bool:
    """Return whether *skill_id* names a stored skill.  Non-numeric ids never exist."""
    parsed = _parse_skill_id(skill_id)
    if parsed is None:
        return False
    return await db.get(Skill, parsed) is not None


async def resolve_skill_names(db: AsyncSession, skill_ids: Iterable[str]) -> list[str]:
    """Return the names of the active skills among *skill_ids*, ordered by name."""
    parsed = [value for value in (_parse_skill_id(skill_id) for skill_id in skill_ids) if value is not None]
    if not parsed:
        return []
    result = await db.execute(
        select(Skill.name).where(Skill.id.in_(parsed), Skill.is_active.is_(True)).order_by(Skill.name),
    )
    return list(result.scalars().all())


async def validate_skill_ids(db: AsyncSession, skill_ids: Iterable[str]) -> None:
    """Check every id against the catalog, failing on the first unknown one.

    Raises ``InvalidSkillError`` naming the offending id.
    """
    for skill_id in skill_ids:
        if not await skill_exists(db, skill_id):
            logger.warning("Rejected unknown skill id {}", skill_id)
            raise InvalidSkillError.for_skill(skill_id)


# -- Writes --------------------------------------------------------------------


async def create_skill(db: AsyncSession, *, name: str, description: str | None = None) -> Skill:
    """Create an active skill.  Raises ``DuplicateSkillError`` on a name clash."""
    await _ensure_name_available(db, name)

    skill = Skill(name=name, description=description, is_active=True)
    db.add(skill)
    await _commit_or_conflict(db, name)
    await db.refresh(skill)

    logger.info("Created skill {} with ID {}", skill.name, skill.id)
    return skill


async def update_skill(
    db: AsyncSession,
    skill_id: int,
    *,
    name: str | None = None,
    description: str | None = None,
    is_active: bool | None = None,
) -> Skill:
    """Update the given fields of a skill; ``None`` leaves a field unchanged."""
    skill = await get_skill(db, skill_id)

    if name is not None and name != skill.name:
        await _ensure_name_available(db, name, exclude_id=skill_id)
        skill.name = name
    if description is not None:
        skill.description = description
    if is_active is not None:
        skill.is_active = is_active

    await _commit_or_conflict(db, skill.name)
    await db.refresh(skill)

    logger.info("Updated skill {}", skill_id)
    return skill


async def toggle_skill(db: AsyncSession, skill_id: int) -> Skill:
    """Flip a skill's active flag."""
    skill = await get_skill(db, skill_id)
    skill.is_active = not skill.is_active
    await db.commit()
    await db.refresh(skill)

    logger.info("Skill {} is now {}", skill_id, "active" if skill.is_active else "inactive")
    return skill


async def delete_skill(db: AsyncSession, skill_id: int) -> None:
    skill = await get_skill(db, skill_id)
    await db.delete(skill)
    await db.commit()
    logger.info("Deleted skill {}", skill_id)
