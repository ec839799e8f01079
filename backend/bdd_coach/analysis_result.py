"""Data models for scenario quality analysis results."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .scenario_steps import ParseErrorKind

# Rubric weights over the six dimensions, in field order.
WEIGHTS: Dict[str, float] = {
    "clarity": 0.20,
    "business_value": 0.20,
    "gherkin": 0.20,
    "testability": 0.20,
    "specificity": 0.10,
    "duplication": 0.10,
}


class AntipatternCategory(str, Enum):
    UI_CENTRIC = "UI-centric"
    IMPLEMENTATION_DETAIL = "Implementation detail"
    VAGUE_LANGUAGE = "Vague language"
    TOO_COMPLEX = "Too complex"
    MISSING_GIVEN = "Missing Given"
    MISSING_WHEN = "Missing When"
    MISSING_THEN = "Missing Then"


class ScenarioStatus(str, Enum):
    SUBMITTED = "submitted"
    ANALYZED = "analyzed"
    REVISION_NEEDED = "revision_needed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Antipattern(BaseModel):
    """A detected issue with the step line (or scenario-level gap) that triggered it."""

    category: AntipatternCategory
    evidence: str

    def __str__(self) -> str:
        return f"{self.category.value}: {self.evidence}"


class DimensionScores(BaseModel):
    """Per-dimension rubric scores on the 0-100 scale."""

    clarity: float = Field(default=0.0, ge=0.0, le=100.0)
    business_value: float = Field(default=0.0, ge=0.0, le=100.0)
    gherkin: float = Field(default=0.0, ge=0.0, le=100.0)
    testability: float = Field(default=0.0, ge=0.0, le=100.0)
    specificity: float = Field(default=0.0, ge=0.0, le=100.0)
    duplication: float = Field(default=0.0, ge=0.0, le=100.0)

    def weighted_total(self) -> float:
        total = 0.0
        for name, weight in WEIGHTS.items():
            total += weight * getattr(self, name)
        return total


class AnalysisResult(BaseModel):
    """Outcome of a single ``analyze`` call; a pure function of the scenario text."""

    scores: DimensionScores = Field(default_factory=DimensionScores)
    overall_score: float = Field(default=0.0, ge=0.0)
    antipatterns: List[Antipattern] = Field(default_factory=list)
    automation_ready: bool = False
    feedback: str = ""
    parse_error: Optional[str] = None
    parse_error_kind: Optional[ParseErrorKind] = None
    step_count: int = Field(default=0, ge=0)


__all__ = [
    "AnalysisResult",
    "Antipattern",
    "AntipatternCategory",
    "DimensionScores",
    "ScenarioStatus",
    "WEIGHTS",
]
