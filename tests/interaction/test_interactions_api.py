"""HTTP tests for the agent and admin interaction endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from switchboard.interaction.db.tables import Skill
from switchboard.shared.errors import StaleEventError, UpstreamUnavailableError
from tests.helpers import ADMIN_TOKEN, AGENT_TOKEN, FakeAgentStateClient, auth

TIMESTAMP = "2024-01-01T10:00:00Z"


@pytest.mark.parametrize(
    ("path", "event_type"),
    [
        ("start-do-not-disturb", "START_DO_NOT_DISTURB"),
        ("end-do-not-disturb", "END_DO_NOT_DISTURB"),
        ("start-call", "CALL_STARTED"),
        ("end-call", "CALL_ENDED"),
    ],
)
async def test_interaction_endpoints_forward_event(
    client: AsyncClient,
    agent_state: FakeAgentStateClient,
    path: str,
    event_type: str,
) -> None:
    resp = await client.post(f"/api/interactions/{path}", json={"timestamp": TIMESTAMP}, headers=auth(AGENT_TOKEN))

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["error"] is None
    assert body["message"] == "Agent activity updated successfully"
    assert body["data"] == {
        "agent_id": 7,
        "action": event_type,
        "timestamp": "2024-01-01T10:00:00Z",
        "skills": [],
    }
    [(event, token)] = agent_state.events
    assert event.event_type == event_type
    assert token == AGENT_TOKEN


async def test_interaction_without_token(client: AsyncClient, agent_state: FakeAgentStateClient) -> None:
    resp = await client.post("/api/interactions/start-call", json={"timestamp": TIMESTAMP})

    assert resp.status_code == 401
    assert resp.json() == {
        "success": False,
        "message": "Authorization token required",
        "error": "unauthenticated",
        "data": None,
    }
    assert agent_state.events == []


async def test_interaction_with_unknown_token(client: AsyncClient) -> None:
    resp = await client.post("/api/interactions/start-call", json={"timestamp": TIMESTAMP}, headers=auth("nope"))

    assert resp.status_code == 404
    assert resp.json()["message"] == "Agent not found"
    assert resp.json()["error"] == "not_found"


@pytest.mark.parametrize("skill_id", ["12", "99999999999999999999999", " 1 "])
async def test_interaction_with_invalid_skill(
    client: AsyncClient, agent_state: FakeAgentStateClient, catalog: list[Skill], skill_id: str
) -> None:
    resp = await client.post(
        "/api/interactions/start-call",
        json={"timestamp": TIMESTAMP, "skill_ids": [skill_id]},
        headers=auth(AGENT_TOKEN),
    )

    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_skill"
    assert resp.json()["message"] == f"Skill with ID {skill_id} does not exist"
    assert agent_state.events == []


async def test_interaction_with_valid_skills(
    client: AsyncClient,
    agent_state: FakeAgentStateClient,
    catalog: list[Skill],
) -> None:
    skill_ids = [str(catalog[1].id)]
    resp = await client.post(
        "/api/interactions/end-call",
        json={"timestamp": TIMESTAMP, "skill_ids": skill_ids},
        headers=auth(AGENT_TOKEN),
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["skills"] == skill_ids
    assert agent_state.events[0][0].skills == skill_ids


@pytest.mark.parametrize(
    ("error", "status_code", "kind"),
    [
        (StaleEventError("Event timestamp is too old."), 400, "stale_event"),
        (UpstreamUnavailableError("Agent state service unreachable"), 502, "upstream_unavailable"),
    ],
)
async def test_registry_failure_envelope(
    client: AsyncClient,
    agent_state: FakeAgentStateClient,
    error: Exception,
    status_code: int,
    kind: str,
) -> None:
    agent_state.error = error
    resp = await client.post("/api/interactions/start-call", json={"timestamp": TIMESTAMP}, headers=auth(AGENT_TOKEN))

    assert resp.status_code == status_code
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == kind
    assert body["data"] is None


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


async def test_admin_activity(client: AsyncClient, agent_state: FakeAgentStateClient, catalog: list[Skill]) -> None:
    resp = await client.post(
        "/api/admin/agents/activity",
        json={"agent_id": 3, "action": "CALL_STARTED", "timestamp": TIMESTAMP, "skill_ids": [str(catalog[0].id)]},
        headers=auth(ADMIN_TOKEN),
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["agent_id"] == 3
    [(event, token)] = agent_state.events
    assert event.agent_id == 3
    assert token == ADMIN_TOKEN


async def test_admin_activity_requires_admin(client: AsyncClient, agent_state: FakeAgentStateClient) -> None:
    resp = await client.post(
        "/api/admin/agents/activity",
        json={"agent_id": 3, "action": "CALL_STARTED", "timestamp": TIMESTAMP},
        headers=auth(AGENT_TOKEN),
    )

    assert resp.status_code == 403
    assert resp.json()["error"] == "forbidden"
    assert agent_state.events == []


async def test_admin_skills_update(client: AsyncClient, agent_state: FakeAgentStateClient, catalog: list[Skill]) -> None:
    skill_ids = [str(catalog[0].id), str(catalog[1].id)]
    resp = await client.post("/api/admin/agents/3/skills", json={"skill_ids": skill_ids}, headers=auth(ADMIN_TOKEN))

    assert resp.status_code == 200
    assert resp.json()["message"] == "Agent skills updated successfully"
    assert resp.json()["data"] == {"agent_id": 3, "updated_skills": skill_ids}


async def test_admin_skills_update_rejects_empty_list(client: AsyncClient) -> None:
    resp = await client.post("/api/admin/agents/3/skills", json={"skill_ids": []}, headers=auth(ADMIN_TOKEN))
    assert resp.status_code == 422
    assert resp.json()["success"] is False
    assert resp.json()["error"] == "invalid_request"
    assert resp.json()["data"] is None


async def test_malformed_interaction_uses_envelope(client: AsyncClient, agent_state: FakeAgentStateClient) -> None:
    resp = await client.post(
        "/api/interactions/start-call", json={"timestamp": "not-a-date"}, headers=auth(AGENT_TOKEN)
    )

    assert resp.status_code == 422
    body = resp.json()
    assert set(body) == {"success", "message", "error", "data"}
    assert body["success"] is False
    assert body["error"] == "invalid_request"
    assert body["message"].startswith("Invalid request: body.timestamp: ")
    assert agent_state.events == []
