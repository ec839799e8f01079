"""Stateless REST adapter over the scenario analyzer and adaptive engine.

Callers own persistence: prior records and catalog entries arrive in the
request body and the updated state is returned for them to store.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from .analysis_result import AnalysisResult, ScenarioStatus
from .curriculum import CurriculumModule, Exercise, ExerciseCatalog, LearnerRole, default_curriculum, find_module
from .learner_performance import ComponentScores, PerformanceRecord
from .performance_engine import update_performance
from .progression import NextModule, ProgressionDecision, decide_progression, next_module
from .scenario_analyzer import analyze, review_status
from .telemetry import emit_event

router = APIRouter(prefix="/api", tags=["coach"])
logger = logging.getLogger(__name__)

MAX_SCENARIO_CHARS = 20_000


class ScenarioAnalysisRequest(BaseModel):
    content: str = Field(default="", max_length=MAX_SCENARIO_CHARS)


class ScenarioAnalysisResponse(BaseModel):
    analysis: AnalysisResult
    status: ScenarioStatus


class PerformanceUpdateRequest(BaseModel):
    learner_id: str = Field(..., min_length=1)
    module_number: int = Field(..., ge=1)
    components: ComponentScores
    previous: Optional[PerformanceRecord] = None
    role: Optional[LearnerRole] = None
    exercises: List[Exercise] = Field(default_factory=list)
    attempted_exercise_ids: List[str] = Field(default_factory=list)
    scenario_quality: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    module_completed: Optional[bool] = None


class ProgressionRequest(BaseModel):
    record: Optional[PerformanceRecord] = None
    module_completed: Optional[bool] = None
    has_accepted_scenario: bool = False
    passing_score: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    curriculum: Optional[List[CurriculumModule]] = None


@router.post("/scenarios/analyze", response_model=ScenarioAnalysisResponse)
def analyze_scenario(payload: ScenarioAnalysisRequest) -> ScenarioAnalysisResponse:
    result = analyze(payload.content)
    review = review_status(result)
    emit_event(
        "scenario_analyzed",
        overall_score=round(result.overall_score, 2),
        automation_ready=result.automation_ready,
        antipatterns=len(result.antipatterns),
        parse_error=result.parse_error_kind,
        status=review,
    )
    return ScenarioAnalysisResponse(analysis=result, status=review)


@router.post("/adaptive/performance", response_model=PerformanceRecord)
def update_learner_performance(payload: PerformanceUpdateRequest) -> PerformanceRecord:
    try:
        record = update_performance(
            payload.previous,
            payload.components,
            learner_id=payload.learner_id,
            module_number=payload.module_number,
            catalog=ExerciseCatalog(payload.exercises),
            role=payload.role,
            attempted_exercise_ids=payload.attempted_exercise_ids,
            scenario_quality=payload.scenario_quality,
            module_completed=payload.module_completed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    emit_event(
        "performance_updated",
        learner_id=record.learner_id,
        module_number=record.module_number,
        performance_score=round(record.performance_score, 2),
        proficiency_level=record.proficiency_level,
        weak_areas=record.weak_areas,
        interventions_count=record.interventions_count,
    )
    return record


@router.post("/adaptive/progression", response_model=ProgressionDecision)
def decide_learner_progression(payload: ProgressionRequest) -> ProgressionDecision:
    curriculum = payload.curriculum if payload.curriculum is not None else default_curriculum()
    # Without an explicit flag the stored record decides completion.
    module_completed = payload.module_completed
    if module_completed is None:
        module_completed = payload.record is not None and payload.record.module_completed
    decision = decide_progression(
        payload.record,
        module_completed,
        payload.has_accepted_scenario,
        threshold=payload.passing_score,
        curriculum=curriculum,
    )
    emit_event(
        "progression_decided",
        learner_id=payload.record.learner_id if payload.record else None,
        module_number=decision.module_number,
        state=decision.state,
        unmet=decision.unmet_conditions,
    )
    return decision


@router.get("/curriculum/next-module/{module_number}", response_model=NextModule)
def lookup_next_module(module_number: int) -> NextModule:
    curriculum = default_curriculum()
    if find_module(curriculum, module_number) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Module {module_number} not found")
    return next_module(curriculum, module_number)


__all__ = ["router"]
