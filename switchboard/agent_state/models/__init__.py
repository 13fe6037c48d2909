"""Data models for the agent-state service."""

from switchboard.agent_state.models.api import AgentCreate, EventAck
from switchboard.shared.contracts import AgentEvent, AgentRecord, AgentState, EventType

__all__ = [
    "AgentCreate",
    "AgentEvent",
    "AgentRecord",
    "AgentState",
    "EventAck",
    "EventType",
]
