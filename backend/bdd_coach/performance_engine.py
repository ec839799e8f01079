"""Adaptive performance engine.

Combines the five component scores into a learner performance score (PS)::

    PS = 0.20*knowledge + 0.40*scenario_quality + 0.15*collaboration
         + 0.15*automation + 0.10*time_efficiency

and derives proficiency, weak areas and remedial exercise recommendations.
Persistence and locking of ``PerformanceRecord`` belong to the caller; this
module only mutates the record it is handed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from statistics import mean
from typing import Collection, Dict, Iterable, List, Optional

from .config import get_settings
from .curriculum import DifficultyLevel, ExerciseCatalog, LearnerRole
from .learner_performance import (
    PERFORMANCE_WEIGHTS,
    WEAK_AREA_COMPONENTS,
    ComponentScores,
    PerformanceRecord,
    ProficiencyLevel,
    WeakArea,
)

logger = logging.getLogger(__name__)

STRUGGLING_BELOW = 60.0
MASTERING_FROM = 85.0

# Remedial difficulty per weak area, in recommendation priority order.
RECOMMENDATION_POLICY: Dict[WeakArea, DifficultyLevel] = {
    WeakArea.SCENARIO_QUALITY: DifficultyLevel.FOUNDATION,
    WeakArea.AUTOMATION: DifficultyLevel.STANDARD,
}


def calculate_performance_score(components: ComponentScores) -> float:
    total = 0.0
    for name, weight in PERFORMANCE_WEIGHTS.items():
        total += weight * getattr(components, name)
    return total


def classify_proficiency(performance_score: float) -> ProficiencyLevel:
    if performance_score < STRUGGLING_BELOW:
        return ProficiencyLevel.STRUGGLING
    if performance_score < MASTERING_FROM:
        return ProficiencyLevel.PROGRESSING
    return ProficiencyLevel.MASTERING


def identify_weak_areas(
    components: ComponentScores,
    threshold: Optional[float] = None,
) -> List[WeakArea]:
    limit = get_settings().weak_area_threshold if threshold is None else threshold
    return [area for area, field in WEAK_AREA_COMPONENTS.items() if getattr(components, field) < limit]


def recommend_exercises(
    weak_areas: Iterable[WeakArea],
    catalog: Optional[ExerciseCatalog],
    module_number: int,
    *,
    role: Optional[LearnerRole] = None,
    attempted: Collection[str] = (),
    per_area: Optional[int] = None,
) -> List[str]:
    """Exercise ids for known weak areas, ordered by policy priority then catalog order."""
    if catalog is None:
        return []
    limit = get_settings().recommendations_per_area if per_area is None else per_area
    weak = set(weak_areas)
    attempted_ids = set(attempted)
    recommendations: List[str] = []

    for area, difficulty in RECOMMENDATION_POLICY.items():
        if area not in weak:
            continue
        picked = 0
        for exercise in catalog.query(module_number, difficulty=difficulty, role=role):
            if picked >= limit:
                break
            if exercise.exercise_id in attempted_ids or exercise.exercise_id in recommendations:
                continue
            recommendations.append(exercise.exercise_id)
            picked += 1
    return recommendations


def update_performance(
    record: Optional[PerformanceRecord],
    components: ComponentScores,
    *,
    learner_id: str,
    module_number: int,
    catalog: Optional[ExerciseCatalog] = None,
    role: Optional[LearnerRole] = None,
    attempted_exercise_ids: Collection[str] = (),
    scenario_quality: Optional[float] = None,
    module_completed: Optional[bool] = None,
) -> PerformanceRecord:
    """Apply a fresh set of component scores to a learner's module record.

    Creates the record on first evaluation. ``interventions_count`` grows by
    one only when this update classifies the learner as struggling.

    When ``scenario_quality`` is given it is counted as a new attempt and the
    best quality seen so far replaces ``components.scenario_quality_score``.
    """
    if record is None:
        record = PerformanceRecord(learner_id=learner_id, module_number=module_number)
    elif record.learner_id != learner_id or record.module_number != module_number:
        raise ValueError(
            f"Performance record belongs to {record.learner_id}/module {record.module_number}, "
            f"not {learner_id}/module {module_number}."
        )

    if scenario_quality is not None:
        record_scenario_attempt(record, scenario_quality)
        components = components.model_copy(update={"scenario_quality_score": record.best_scenario_quality})
    if module_completed is not None:
        record.module_completed = module_completed

    for name in PERFORMANCE_WEIGHTS:
        setattr(record, name, getattr(components, name))

    record.performance_score = calculate_performance_score(components)
    record.proficiency_level = classify_proficiency(record.performance_score)
    record.weak_areas = identify_weak_areas(components)
    record.recommended_exercise_ids = recommend_exercises(
        record.weak_areas,
        catalog,
        module_number,
        role=role,
        attempted=attempted_exercise_ids,
    )
    if record.proficiency_level is ProficiencyLevel.STRUGGLING:
        record.interventions_count += 1
    record.updated_at = datetime.now(timezone.utc)

    logger.info(
        "Updated performance learner=%s module=%s score=%.2f level=%s weak=%s",
        learner_id,
        module_number,
        record.performance_score,
        record.proficiency_level.value,
        ",".join(area.value for area in record.weak_areas) or "-",
    )
    return record


def record_scenario_attempt(record: PerformanceRecord, scenario_quality: float) -> PerformanceRecord:
    """Count a scenario submission and keep the best quality score seen so far."""
    if not 0.0 <= scenario_quality <= 100.0:
        raise ValueError(f"Scenario quality must be within 0-100, got {scenario_quality}.")
    record.attempt_count += 1
    if record.best_scenario_quality is None or scenario_quality > record.best_scenario_quality:
        record.best_scenario_quality = scenario_quality
    record.updated_at = datetime.now(timezone.utc)
    return record


def average_scenario_quality(scores: Iterable[Optional[float]]) -> float:
    values = [score if score is not None else 0.0 for score in scores]
    return mean(values) if values else 0.0


__all__ = [
    "MASTERING_FROM",
    "RECOMMENDATION_POLICY",
    "STRUGGLING_BELOW",
    "average_scenario_quality",
    "calculate_performance_score",
    "classify_proficiency",
    "identify_weak_areas",
    "recommend_exercises",
    "record_scenario_attempt",
    "update_performance",
]
