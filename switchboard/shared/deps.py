"""FastAPI dependencies shared by both services.

Usage in route handlers::

    @router.post("/things/create")
    async def create_thing(db: DbSession, caller: AdminCaller, body: ThingCreate) -> ThingResponse:
        ...

Both apps keep their resources on ``app.state`` (set up in the lifespan):
``db_session_factory`` and ``verifier``.  The database dependency raises
HTTP 503 if the backing store was not configured.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from switchboard.shared.errors import ForbiddenError, UnauthenticatedError
from switchboard.shared.identity import CredentialVerifier, Identity

_bearer = HTTPBearer(auto_error=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an async SQLAlchemy session, closing it after the request.

    Managers commit on success.  If the handler raises, the session is
    simply closed and the implicit transaction is rolled back.
    """
    session_factory = request.app.state.db_session_factory
    if session_factory is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not configured (database_url is unset).",
        )
    session: AsyncSession = session_factory()
    try:
        yield session
    finally:
        await session.close()


def get_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.verifier


async def get_optional_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> str | None:
    """Return the bearer token, or None when the header is absent or not a bearer scheme."""
    if credentials is None or not credentials.credentials.strip():
        return None
    return credentials.credentials.strip()


async def get_token(token: Annotated[str | None, Depends(get_optional_token)]) -> str:
    if token is None:
        raise UnauthenticatedError("Authorization token required")
    return token


async def get_caller(
    token: Annotated[str, Depends(get_token)],
    verifier: Annotated[CredentialVerifier, Depends(get_verifier)],
) -> Identity:
    """Resolve the caller through the identity service."""
    identity = await verifier.who_am_i(token)
    if identity is None:
        raise UnauthenticatedError("Invalid or expired token")
    return identity


async def require_admin(caller: Annotated[Identity, Depends(get_caller)]) -> Identity:
    if not caller.is_admin:
        raise ForbiddenError("Administrator role required")
    return caller


# -- Annotated type aliases for concise route signatures ---------------------

DbSession = Annotated[AsyncSession, Depends(get_db)]
"""Annotated dependency: async SQLAlchemy session (auto-closed after request)."""

Verifier = Annotated[CredentialVerifier, Depends(get_verifier)]

OptionalToken = Annotated[str | None, Depends(get_optional_token)]
"""Bearer token if present; the handler decides what absence means."""

BearerToken = Annotated[str, Depends(get_token)]
"""Bearer token; raises ``UnauthenticatedError`` when absent."""

Caller = Annotated[Identity, Depends(get_caller)]
"""Identity behind the bearer token."""

AdminCaller = Annotated[Identity, Depends(require_admin)]
"""Identity behind the bearer token, required to hold the admin role."""
