"""Anti-pattern detection shared by feedback generation and the automation gate."""

from __future__ import annotations

from typing import List, Sequence

from .analysis_result import Antipattern, AntipatternCategory
from .scenario_rubric import (
    IMPLEMENTATION_KEYWORDS,
    UI_KEYWORDS,
    VAGUE_TERMS,
    is_overlong,
    keywords_present,
    matched_terms,
)
from .scenario_steps import Step, StepKeyword

_STRUCTURAL_CHECKS = (
    (StepKeyword.GIVEN, AntipatternCategory.MISSING_GIVEN),
    (StepKeyword.WHEN, AntipatternCategory.MISSING_WHEN),
    (StepKeyword.THEN, AntipatternCategory.MISSING_THEN),
)


def _step_categories(step: Step) -> List[AntipatternCategory]:
    found: List[AntipatternCategory] = []
    if matched_terms(step, UI_KEYWORDS):
        found.append(AntipatternCategory.UI_CENTRIC)
    if matched_terms(step, IMPLEMENTATION_KEYWORDS):
        found.append(AntipatternCategory.IMPLEMENTATION_DETAIL)
    if matched_terms(step, VAGUE_TERMS):
        found.append(AntipatternCategory.VAGUE_LANGUAGE)
    if is_overlong(step):
        found.append(AntipatternCategory.TOO_COMPLEX)
    return found


def detect_antipatterns(steps: Sequence[Step]) -> List[Antipattern]:
    """One entry per matched category per step, in step order, then scenario-level gaps."""
    detected: List[Antipattern] = []
    for step in steps:
        for category in _step_categories(step):
            detected.append(Antipattern(category=category, evidence=step.line))

    present = keywords_present(steps)
    for keyword, category in _STRUCTURAL_CHECKS:
        if keyword not in present:
            detected.append(Antipattern(category=category, evidence=f"No {keyword.value} step"))
    return detected


__all__ = ["detect_antipatterns"]
