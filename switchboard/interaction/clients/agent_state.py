"""httpx adapter for the agent-state registry API."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from switchboard.shared.contracts import AgentEvent, AgentRecord, ErrorBody
from switchboard.shared.errors import SwitchboardError, UpstreamUnavailableError, error_from_kind

APPLY_EVENT_PATH = "/api/events/apply"
AGENT_BY_IDENTITY_PATH = "/api/agents/by-identity/{identity_id}/get"
HEALTH_PATH = "/api/health"


def _error_from_response(response: httpx.Response) -> SwitchboardError:
    try:
        body = ErrorBody.model_validate_json(response.content)
    except ValidationError:
        return UpstreamUnavailableError(
            f"Agent state service answered {response.status_code} without an error body",
        )
    return error_from_kind(body.kind, body.message)


class HttpAgentStateClient:
    """``AgentStateClient`` over HTTP.

    The caller's bearer token travels as a per-request ``Authorization``
    header; the underlying ``httpx.AsyncClient`` carries no credentials of
    its own, so concurrent requests never see each other's tokens.
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

    async def _request(self, method: str, path: str, token: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(
                method,
                path,
                headers={"Authorization": f"Bearer {token}"},
                **kwargs,
            )
        except httpx.HTTPError as exc:
            logger.error("Agent state service unreachable ({} {}): {}", method, path, exc)
            msg = f"Agent state service unreachable: {exc}"
            raise UpstreamUnavailableError(msg) from exc

        if response.is_error:
            error = _error_from_response(response)
            logger.warning(
                "Agent state service rejected {} {} with {}: {}",
                method,
                path,
                error.kind,
                error.message,
            )
            raise error
        return response

    async def apply_event(self, event: AgentEvent, token: str) -> None:
        await self._request("POST", APPLY_EVENT_PATH, token, json=event.model_dump(mode="json"))
        logger.debug("Forwarded {} for agent {}", event.event_type, event.agent_id)

    async def get_agent_by_identity(self, identity_id: int, token: str) -> AgentRecord:
        response = await self._request("GET", AGENT_BY_IDENTITY_PATH.format(identity_id=identity_id), token)
        try:
            return AgentRecord.model_validate_json(response.content)
        except ValidationError as exc:
            msg = f"Agent state service returned an unreadable agent: {exc}"
            raise UpstreamUnavailableError(msg) from exc

    async def is_healthy(self) -> bool:
        try:
            response = await self._client.get(HEALTH_PATH)
        except httpx.HTTPError as exc:
            logger.error("Agent state service health check failed: {}", exc)
            return False
        return response.is_success
