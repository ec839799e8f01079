from __future__ import annotations

from typing import List

from bdd_coach.learner_performance import WeakArea
from bdd_coach.telemetry import TelemetryEvent, clear_listeners, emit_event, register_listener


def test_emit_event_fans_out_plain_payload() -> None:
    received: List[TelemetryEvent] = []
    register_listener(received.append)
    try:
        event = emit_event("performance_updated", learner_id="ada", weak_areas=[WeakArea.AUTOMATION])
    finally:
        clear_listeners()

    assert received == [event]
    assert event.payload == {"learner_id": "ada", "weak_areas": ["automation"]}


def test_failing_listener_does_not_stop_others() -> None:
    received: List[str] = []

    def _broken(_: TelemetryEvent) -> None:
        raise RuntimeError("listener down")

    register_listener(_broken)
    register_listener(lambda event: received.append(event.name))
    try:
        emit_event("scenario_analyzed", overall_score=61.0)
    finally:
        clear_listeners()

    assert received == ["scenario_analyzed"]


def test_unsubscribed_listener_stops_receiving() -> None:
    received: List[str] = []
    unsubscribe = register_listener(lambda event: received.append(event.name))

    emit_event("progression_decided")
    unsubscribe()
    emit_event("progression_decided")

    assert received == ["progression_decided"]
