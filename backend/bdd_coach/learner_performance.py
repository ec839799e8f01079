"""Learner performance models for the adaptive engine."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

# Performance score weights, in component order.
PERFORMANCE_WEIGHTS: Dict[str, float] = {
    "knowledge_score": 0.20,
    "scenario_quality_score": 0.40,
    "collaboration_score": 0.15,
    "automation_readiness": 0.15,
    "time_efficiency": 0.10,
}


class ProficiencyLevel(str, Enum):
    STRUGGLING = "struggling"  # PS < 60
    PROGRESSING = "progressing"  # 60 <= PS < 85
    MASTERING = "mastering"  # PS >= 85


class WeakArea(str, Enum):
    KNOWLEDGE = "knowledge"
    SCENARIO_QUALITY = "scenario_quality"
    COLLABORATION = "collaboration"
    AUTOMATION = "automation"
    TIME_MANAGEMENT = "time_management"


# Component field backing each weak-area tag, in canonical tag order.
WEAK_AREA_COMPONENTS: Dict[WeakArea, str] = {
    WeakArea.KNOWLEDGE: "knowledge_score",
    WeakArea.SCENARIO_QUALITY: "scenario_quality_score",
    WeakArea.COLLABORATION: "collaboration_score",
    WeakArea.AUTOMATION: "automation_readiness",
    WeakArea.TIME_MANAGEMENT: "time_efficiency",
}


class ComponentScores(BaseModel):
    """The five 0-100 inputs to the performance score."""

    knowledge_score: float = Field(default=0.0, ge=0.0, le=100.0)
    scenario_quality_score: float = Field(default=0.0, ge=0.0, le=100.0)
    collaboration_score: float = Field(default=0.0, ge=0.0, le=100.0)
    automation_readiness: float = Field(default=0.0, ge=0.0, le=100.0)
    time_efficiency: float = Field(default=0.0, ge=0.0, le=100.0)


class PerformanceRecord(ComponentScores):
    """Per (learner, module) performance state, mutated in place on each evaluation."""

    learner_id: str = Field(min_length=1)
    module_number: int = Field(ge=1)
    performance_score: float = Field(default=0.0, ge=0.0)
    proficiency_level: ProficiencyLevel = ProficiencyLevel.STRUGGLING
    weak_areas: List[WeakArea] = Field(default_factory=list)
    recommended_exercise_ids: List[str] = Field(default_factory=list)
    interventions_count: int = Field(default=0, ge=0)
    attempt_count: int = Field(default=0, ge=0)
    best_scenario_quality: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    module_completed: bool = False
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def components(self) -> ComponentScores:
        return ComponentScores(**{name: getattr(self, name) for name in PERFORMANCE_WEIGHTS})


__all__ = [
    "ComponentScores",
    "PERFORMANCE_WEIGHTS",
    "PerformanceRecord",
    "ProficiencyLevel",
    "WEAK_AREA_COMPONENTS",
    "WeakArea",
]
