"""Agent state transition function and event freshness guard.

The transition is a pure function of the event type and, for
``START_DO_NOT_DISTURB``, the event's hour of day.  The agent's current
state is accepted for signature symmetry but never consulted: a
do-not-disturb request during the lunch window always means lunch.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from switchboard.shared.clock import as_utc, utcnow
from switchboard.shared.contracts import AgentState, EventType

FRESHNESS_WINDOW = timedelta(minutes=60)
LUNCH_HOURS = range(11, 13)  # [11:00, 13:00)

_FIXED_TRANSITIONS: dict[str, AgentState] = {
    EventType.END_DO_NOT_DISTURB: AgentState.AVAILABLE,
    EventType.CALL_STARTED: AgentState.ON_CALL,
    EventType.CALL_ENDED: AgentState.AVAILABLE,
}


def next_state(current_state: AgentState | None, event_type: str, event_timestamp: datetime) -> AgentState | None:
    """Return the state an agent moves to, or None if *event_type* has no transition.

    The lunch window is evaluated on the event timestamp in UTC.
    """
    if event_type == EventType.START_DO_NOT_DISTURB:
        if as_utc(event_timestamp).hour in LUNCH_HOURS:
            return AgentState.ON_LUNCH
        return AgentState.DO_NOT_DISTURB
    return _FIXED_TRANSITIONS.get(event_type)


def is_stale(event_timestamp: datetime, *, now: datetime | None = None) -> bool:
    """True when the event is older than ``FRESHNESS_WINDOW`` relative to *now*."""
    now = as_utc(now) if now is not None else utcnow()
    return as_utc(event_timestamp) < now - FRESHNESS_WINDOW
