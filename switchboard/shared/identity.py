"""Client for the external identity service (the credential verifier).

The identity service issues and verifies bearer tokens.  Switchboard never
inspects tokens itself: it asks the identity service who a token belongs to
(``GET /api/auth/me``) and looks identities up in its directory
(``GET /api/auth/users``).  The caller's token is passed explicitly on every
call and forwarded as the ``Authorization`` header of that request only.
"""

from __future__ import annotations

from typing import Protocol

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

ME_PATH = "/api/auth/me"
USERS_PATH = "/api/auth/users"
HEALTH_PATH = "/api/health/live"


class Identity(BaseModel):
    """An identity as reported by the identity service (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: int
    username: str = ""
    email: str = ""
    is_admin: bool = False
    is_active: bool = True


_IDENTITY_LIST = TypeAdapter(list[Identity])


class CredentialVerifier(Protocol):
    """Capability for resolving bearer tokens and identities."""

    async def who_am_i(self, token: str) -> Identity | None: ...

    async def lookup_identity(self, identity_id: int, token: str) -> Identity | None: ...

    async def is_healthy(self) -> bool: ...


def _auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class HttpCredentialVerifier:
    """``CredentialVerifier`` backed by the identity service's HTTP API.

    Lookup failures of any sort (rejected token, unknown identity, service
    unreachable, malformed payload) are logged and reported as ``None``;
    callers decide which error that maps to.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def who_am_i(self, token: str) -> Identity | None:
        try:
            response = await self._client.get(ME_PATH, headers=_auth_headers(token))
        except httpx.HTTPError as exc:
            logger.error("Error getting identity by token: {}", exc)
            return None

        logger.debug("Identity lookup by token answered {}", response.status_code)
        if not response.is_success:
            logger.warning("Failed to get identity by token (status={})", response.status_code)
            return None

        try:
            identity = Identity.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Identity service returned an unreadable identity: {}", exc)
            return None

        logger.info("Resolved token to identity {} (id={})", identity.username, identity.id)
        return identity

    async def lookup_identity(self, identity_id: int, token: str) -> Identity | None:
        try:
            response = await self._client.get(USERS_PATH, headers=_auth_headers(token))
        except httpx.HTTPError as exc:
            logger.error("Error listing identities: {}", exc)
            return None

        if not response.is_success:
            logger.warning("Failed to list identities (status={})", response.status_code)
            return None

        try:
            identities = _IDENTITY_LIST.validate_json(response.content)
        except ValidationError as exc:
            logger.warning("Identity service returned an unreadable directory: {}", exc)
            return None

        return next((identity for identity in identities if identity.id == identity_id), None)

    async def is_healthy(self) -> bool:
        try:
            response = await self._client.get(HEALTH_PATH)
        except httpx.HTTPError as exc:
            logger.error("Identity service health check failed: {}", exc)
            return False
        return response.is_success
