"""Curriculum progression decisions and the learner path summary."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from .config import get_settings
from .curriculum import CurriculumModule, find_module
from .learner_performance import PerformanceRecord, ProficiencyLevel, WeakArea

logger = logging.getLogger(__name__)


class ProgressionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    READY_TO_ADVANCE = "ready_to_advance"
    COMPLETED = "completed"


class AdvancementCondition(str, Enum):
    PASSING_SCORE = "passing_score"
    MODULE_COMPLETED = "module_completed"
    ACCEPTED_SCENARIO = "accepted_scenario"


class NextModule(BaseModel):
    module_number: Optional[int] = None
    module: Optional[CurriculumModule] = None
    curriculum_complete: bool = False


class ProgressionDecision(BaseModel):
    state: ProgressionState
    module_number: Optional[int] = None
    performance_score: float = 0.0
    passing_score: float
    unmet_conditions: List[AdvancementCondition] = Field(default_factory=list)
    next_module_number: Optional[int] = None
    curriculum_complete: bool = False

    @property
    def ready(self) -> bool:
        return self.state in (ProgressionState.READY_TO_ADVANCE, ProgressionState.COMPLETED)


class LearningPath(BaseModel):
    current_module: Optional[CurriculumModule] = None
    next_module: NextModule
    proficiency_level: Optional[ProficiencyLevel] = None
    performance_score: float = 0.0
    history: List[PerformanceRecord] = Field(default_factory=list)
    recommended_exercise_ids: List[str] = Field(default_factory=list)
    weak_areas: List[WeakArea] = Field(default_factory=list)
    interventions_count: int = 0
    progress_percentage: float = Field(default=0.0, ge=0.0, le=100.0)


def resolve_passing_score(
    module_number: Optional[int],
    threshold: Optional[float] = None,
    curriculum: Optional[Sequence[CurriculumModule]] = None,
) -> float:
    """Explicit threshold, else the module's own passing score, else the configured default."""
    if threshold is not None:
        return threshold
    if curriculum is not None and module_number is not None:
        module = find_module(curriculum, module_number)
        if module is not None:
            return module.passing_score
    return get_settings().default_passing_score


def next_module(curriculum: Sequence[CurriculumModule], module_number: int) -> NextModule:
    """Module immediately after ``module_number``; past the end the curriculum is complete."""
    candidate = find_module(curriculum, module_number + 1)
    if candidate is None:
        return NextModule(curriculum_complete=True)
    return NextModule(module_number=candidate.module_number, module=candidate)


def decide_progression(
    record: Optional[PerformanceRecord],
    module_completed: bool,
    has_accepted_scenario: bool,
    threshold: Optional[float] = None,
    curriculum: Optional[Sequence[CurriculumModule]] = None,
) -> ProgressionDecision:
    module_number = record.module_number if record is not None else None
    passing_score = resolve_passing_score(module_number, threshold, curriculum)

    if record is None:
        return ProgressionDecision(state=ProgressionState.NOT_STARTED, passing_score=passing_score)

    unmet: List[AdvancementCondition] = []
    if record.performance_score < passing_score:
        unmet.append(AdvancementCondition.PASSING_SCORE)
    if not module_completed:
        unmet.append(AdvancementCondition.MODULE_COMPLETED)
    if not has_accepted_scenario:
        unmet.append(AdvancementCondition.ACCEPTED_SCENARIO)

    decision = ProgressionDecision(
        state=ProgressionState.IN_PROGRESS,
        module_number=record.module_number,
        performance_score=record.performance_score,
        passing_score=passing_score,
        unmet_conditions=unmet,
    )
    if unmet:
        return decision

    decision.state = ProgressionState.READY_TO_ADVANCE
    if curriculum is None:
        decision.next_module_number = record.module_number + 1
    else:
        following = next_module(curriculum, record.module_number)
        decision.next_module_number = following.module_number
        if following.curriculum_complete:
            decision.state = ProgressionState.COMPLETED
            decision.curriculum_complete = True

    logger.info(
        "Learner %s cleared module %s (score %.2f >= %.2f); state=%s",
        record.learner_id,
        record.module_number,
        record.performance_score,
        passing_score,
        decision.state.value,
    )
    return decision


def progress_percentage(records: Iterable[PerformanceRecord], curriculum: Sequence[CurriculumModule]) -> float:
    """Share of curriculum modules whose record carries the completion flag."""
    if not curriculum:
        return 0.0
    completed = {record.module_number for record in records if record.module_completed}
    known = {module.module_number for module in curriculum}
    return len(completed & known) / len(known) * 100.0


def build_learning_path(
    records: Sequence[PerformanceRecord],
    current_module_number: int,
    curriculum: Sequence[CurriculumModule],
) -> LearningPath:
    history = sorted(records, key=lambda record: record.module_number)
    current = next((record for record in history if record.module_number == current_module_number), None)

    path = LearningPath(
        current_module=find_module(curriculum, current_module_number),
        next_module=next_module(curriculum, current_module_number),
        history=list(history),
        progress_percentage=progress_percentage(history, curriculum),
    )
    if current is None:
        return path

    path.proficiency_level = current.proficiency_level
    path.performance_score = current.performance_score
    if current.proficiency_level is ProficiencyLevel.STRUGGLING:
        path.recommended_exercise_ids = list(current.recommended_exercise_ids)
        path.weak_areas = list(current.weak_areas)
        path.interventions_count = current.interventions_count
    return path


__all__ = [
    "AdvancementCondition",
    "LearningPath",
    "NextModule",
    "ProgressionDecision",
    "ProgressionState",
    "build_learning_path",
    "decide_progression",
    "next_module",
    "progress_percentage",
    "resolve_passing_score",
]
