"""Error taxonomy shared by the agent-state and interaction services.

Every failure that crosses a service boundary carries a stable ``kind``
string plus a human-readable message.  Managers raise these exceptions,
each app renders them through its registered exception handlers, and the
outbound clients rebuild them from error bodies with ``error_from_kind``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STALE_EVENT = "stale_event"
    INVALID_SKILL = "invalid_skill"
    INVALID_REQUEST = "invalid_request"
    UNKNOWN_EVENT_TYPE = "unknown_event_type"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    INTERNAL = "internal"


class SwitchboardError(Exception):
    """Base class for all domain failures."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    status_code: ClassVar[int] = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthenticatedError(SwitchboardError):
    """Missing or invalid bearer credential."""

    kind = ErrorKind.UNAUTHENTICATED
    status_code = 401


class ForbiddenError(SwitchboardError):
    """Caller is authenticated but lacks the required role."""

    kind = ErrorKind.FORBIDDEN
    status_code = 403


class NotFoundError(SwitchboardError, LookupError):
    """Unknown agent, identity or skill target."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404


class ConflictError(SwitchboardError, ValueError):
    """Duplicate agent or skill."""

    kind = ErrorKind.CONFLICT
    status_code = 409


class StaleEventError(SwitchboardError, ValueError):
    """Event timestamp is older than the freshness window."""

    kind = ErrorKind.STALE_EVENT
    status_code = 400


class InvalidSkillError(SwitchboardError, ValueError):
    """A referenced skill id does not exist in the catalog."""

    kind = ErrorKind.INVALID_SKILL
    status_code = 400

    def __init__(self, message: str, *, skill_id: str | None = None) -> None:
        super().__init__(message)
        self.skill_id = skill_id

    @classmethod
    def for_skill(cls, skill_id: str) -> InvalidSkillError:
        return cls(f"Skill with ID {skill_id} does not exist", skill_id=skill_id)


class UnknownEventTypeError(SwitchboardError, ValueError):
    """Event type outside the closed vocabulary."""

    kind = ErrorKind.UNKNOWN_EVENT_TYPE
    status_code = 400


class InvalidRequestError(SwitchboardError, ValueError):
    """Request body, path or query failed schema validation."""

    kind = ErrorKind.INVALID_REQUEST
    status_code = 422

    @classmethod
    def from_validation_errors(cls, errors: Sequence[Mapping[str, Any]]) -> InvalidRequestError:
        """Summarize FastAPI/pydantic ``errors()`` entries as ``loc: msg`` pairs."""
        details = []
        for error in errors:
            loc = ".".join(str(part) for part in error.get("loc", ()))
            details.append(f"{loc}: {error.get('msg', 'invalid')}")
        if not details:
            return cls("Invalid request")
        return cls("Invalid request: " + "; ".join(details))


class UpstreamUnavailableError(SwitchboardError):
    """A collaborating service could not be reached or answered garbage."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE
    status_code = 502


class InternalError(SwitchboardError):
    """Unexpected failure; details are only in the logs."""


_ERRORS_BY_KIND: dict[ErrorKind, type[SwitchboardError]] = {
    cls.kind: cls
    for cls in (
        UnauthenticatedError,
        ForbiddenError,
        NotFoundError,
        ConflictError,
        StaleEventError,
        InvalidSkillError,
        UnknownEventTypeError,
        InvalidRequestError,
        UpstreamUnavailableError,
        InternalError,
    )
}


def error_from_kind(kind: str, message: str) -> SwitchboardError:
    """Rebuild a typed error from a wire ``kind``.  Unknown kinds become ``InternalError``."""
    try:
        cls = _ERRORS_BY_KIND[ErrorKind(kind)]
    except ValueError:
        return InternalError(message)
    return cls(message)
