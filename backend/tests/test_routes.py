from __future__ import annotations

from typing import List

from fastapi.testclient import TestClient

from bdd_coach.main import app
from bdd_coach.telemetry import TelemetryEvent, clear_listeners, register_listener


MINIMAL_SCENARIO = 'Given a user with balance 100\nWhen they withdraw "50"\nThen the balance should be 50'

STRUGGLING_COMPONENTS = {
    "knowledge_score": 50,
    "scenario_quality_score": 40,
    "collaboration_score": 70,
    "automation_readiness": 30,
    "time_efficiency": 80,
}


def _client() -> TestClient:
    return TestClient(app)


def test_health_endpoint() -> None:
    response = _client().get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_analyze_endpoint_accepts_clean_scenario() -> None:
    events: List[TelemetryEvent] = []
    register_listener(events.append)
    try:
        response = _client().post("/api/scenarios/analyze", json={"content": MINIMAL_SCENARIO})
    finally:
        clear_listeners()

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "accepted"
    assert payload["analysis"]["scores"]["gherkin"] == 100.0
    assert payload["analysis"]["automation_ready"] is True
    assert [event.name for event in events] == ["scenario_analyzed"]
    assert events[0].payload["status"] == "accepted"


def test_analyze_endpoint_reports_parse_error() -> None:
    response = _client().post("/api/scenarios/analyze", json={"content": "   "})

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "rejected"
    assert payload["analysis"]["parse_error"] == "Scenario content is empty"
    assert payload["analysis"]["overall_score"] == 0.0


def test_performance_endpoint_round_trips_record() -> None:
    client = _client()
    body = {
        "learner_id": "ada",
        "module_number": 1,
        "components": STRUGGLING_COMPONENTS,
        "role": "developer",
        "exercises": [
            {"exercise_id": "found-1", "module_number": 1, "title": "Checkout", "difficulty": "foundation"},
            {"exercise_id": "std-1", "module_number": 1, "title": "Refunds", "difficulty": "standard"},
        ],
    }

    first = client.post("/api/adaptive/performance", json=body)
    assert first.status_code == 200
    record = first.json()
    assert record["proficiency_level"] == "struggling"
    assert record["recommended_exercise_ids"] == ["found-1", "std-1"]
    assert record["interventions_count"] == 1

    second = client.post("/api/adaptive/performance", json={**body, "previous": record})
    assert second.status_code == 200
    assert second.json()["interventions_count"] == 2


def test_performance_endpoint_rejects_foreign_record() -> None:
    client = _client()
    body = {"learner_id": "ada", "module_number": 1, "components": STRUGGLING_COMPONENTS}
    record = client.post("/api/adaptive/performance", json=body).json()

    response = client.post(
        "/api/adaptive/performance",
        json={**body, "module_number": 2, "previous": record},
    )
    assert response.status_code == 409


def test_performance_endpoint_validates_component_range() -> None:
    body = {
        "learner_id": "ada",
        "module_number": 1,
        "components": {**STRUGGLING_COMPONENTS, "knowledge_score": 140},
    }
    assert _client().post("/api/adaptive/performance", json=body).status_code == 422


def test_progression_endpoint() -> None:
    record = {"learner_id": "ada", "module_number": 1, "performance_score": 82.0}
    response = _client().post(
        "/api/adaptive/progression",
        json={"record": record, "module_completed": True, "has_accepted_scenario": True},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["state"] == "ready_to_advance"
    assert payload["next_module_number"] == 2


def test_progression_endpoint_falls_back_to_record_completion_flag() -> None:
    client = _client()
    record = {"learner_id": "ada", "module_number": 1, "performance_score": 82.0}

    pending = client.post(
        "/api/adaptive/progression",
        json={"record": record, "has_accepted_scenario": True},
    ).json()
    assert pending["unmet_conditions"] == ["module_completed"]

    finished = client.post(
        "/api/adaptive/progression",
        json={"record": {**record, "module_completed": True}, "has_accepted_scenario": True},
    ).json()
    assert finished["state"] == "ready_to_advance"


def test_performance_endpoint_tracks_best_scenario_quality() -> None:
    body = {
        "learner_id": "ada",
        "module_number": 1,
        "components": STRUGGLING_COMPONENTS,
        "scenario_quality": 90.0,
        "module_completed": True,
    }
    record = _client().post("/api/adaptive/performance", json=body).json()

    assert record["best_scenario_quality"] == 90.0
    assert record["scenario_quality_score"] == 90.0
    assert record["module_completed"] is True


def test_next_module_endpoint() -> None:
    client = _client()

    assert client.get("/api/curriculum/next-module/1").json()["module_number"] == 2
    assert client.get("/api/curriculum/next-module/4").json()["curriculum_complete"] is True
    assert client.get("/api/curriculum/next-module/9").status_code == 404
