"""Outbound clients used by the interaction service."""

from __future__ import annotations

from typing import Protocol

from switchboard.shared.contracts import AgentEvent, AgentRecord


class AgentStateClient(Protocol):
    """One method per remote agent-state operation.

    Implementations raise ``SwitchboardError`` subclasses: the registry's own
    error kinds are rebuilt as-is, transport failures become
    ``UpstreamUnavailableError``.
    """

    async def apply_event(self, event: AgentEvent, token: str) -> None: ...

    async def get_agent_by_identity(self, identity_id: int, token: str) -> AgentRecord: ...

    async def is_healthy(self) -> bool: ...


__all__ = ["AgentStateClient"]
