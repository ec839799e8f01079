"""Scenario quality analysis: rubric scores, anti-patterns, automation gate and feedback."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .analysis_result import (
    AnalysisResult,
    Antipattern,
    DimensionScores,
    ScenarioStatus,
    WEIGHTS,
)
from .antipatterns import detect_antipatterns
from .scenario_rubric import (
    MAX_SCORE,
    score_business_value,
    score_clarity,
    score_duplication,
    score_gherkin,
    score_specificity,
    score_testability,
)
from .scenario_steps import StepExtractionError, extract_steps, malformed_step_lines

logger = logging.getLogger(__name__)

AUTOMATION_GHERKIN_THRESHOLD = 60.0
AUTOMATION_TESTABILITY_THRESHOLD = 60.0
AUTOMATION_MAX_ANTIPATTERNS = 3

ACCEPTED_THRESHOLD = 80.0
REVISION_THRESHOLD = 60.0

# Opening sentence by minimum overall score, highest band first.
SCORE_BANDS: Tuple[Tuple[float, str], ...] = (
    (90.0, "Excellent scenario!"),
    (70.0, "Good scenario with room for improvement."),
    (50.0, "Fair scenario - needs significant improvements."),
    (0.0, "Poor scenario - major revisions needed."),
)

# (dimension, improvement threshold, sentence) in rubric order.
DIMENSION_FEEDBACK: Tuple[Tuple[str, float, str], ...] = (
    ("clarity", 60.0, "Improve clarity by using simple, direct language."),
    ("business_value", 60.0, "Focus on business value rather than UI or implementation details."),
    ("gherkin", 60.0, "Ensure proper Given-When-Then structure."),
    ("testability", 60.0, "Add concrete expected outcomes in Then steps."),
    ("specificity", 60.0, "Use specific values instead of vague terms like 'some' or 'something'."),
    ("duplication", 80.0, "Remove duplicate or highly similar steps."),
)

AUTOMATION_READY_SENTENCE = "Scenario is automation-ready."
AUTOMATION_BLOCKED_SENTENCE = "Scenario needs improvements before automation."


def normalize_score(value: float, scale: float) -> float:
    """Convert a score from a legacy 0-``scale`` rubric onto the 0-100 scale."""
    if scale <= 0:
        raise ValueError("Score scale must be positive.")
    return max(0.0, min(MAX_SCORE, value * MAX_SCORE / scale))


def is_automation_ready(scores: DimensionScores, antipatterns: List[Antipattern]) -> bool:
    return (
        scores.gherkin >= AUTOMATION_GHERKIN_THRESHOLD
        and scores.testability >= AUTOMATION_TESTABILITY_THRESHOLD
        and len(antipatterns) < AUTOMATION_MAX_ANTIPATTERNS
    )


def _opening_sentence(overall_score: float) -> str:
    for minimum, sentence in SCORE_BANDS:
        if overall_score >= minimum:
            return sentence
    return SCORE_BANDS[-1][1]


def generate_feedback(
    scores: DimensionScores,
    overall_score: float,
    antipatterns: List[Antipattern],
    automation_ready: bool,
) -> str:
    sentences = [_opening_sentence(overall_score)]
    for dimension, threshold, sentence in DIMENSION_FEEDBACK:
        if getattr(scores, dimension) < threshold:
            sentences.append(sentence)
    if antipatterns:
        sentences.append(f"Found {len(antipatterns)} anti-patterns to address.")
    sentences.append(AUTOMATION_READY_SENTENCE if automation_ready else AUTOMATION_BLOCKED_SENTENCE)
    return " ".join(sentences)


def _failed_result(error: StepExtractionError) -> AnalysisResult:
    return AnalysisResult(
        scores=DimensionScores(),
        overall_score=0.0,
        antipatterns=[],
        automation_ready=False,
        feedback=f"Scenario could not be analyzed: {error}.",
        parse_error=str(error),
        parse_error_kind=error.kind,
    )


def analyze(text: Optional[str]) -> AnalysisResult:
    """Score scenario text against the rubric.

    Empty input and text without recognisable steps are reported through
    ``parse_error`` with every score forced to zero rather than raised.
    """
    try:
        steps = extract_steps(text)
    except StepExtractionError as exc:
        logger.debug("Scenario parse failure: %s", exc.kind.value)
        return _failed_result(exc)

    malformed = malformed_step_lines(text)
    scores = DimensionScores(
        clarity=score_clarity(steps),
        business_value=score_business_value(steps),
        gherkin=score_gherkin(steps, malformed_lines=len(malformed)),
        testability=score_testability(steps),
        specificity=score_specificity(steps),
        duplication=score_duplication(steps),
    )
    overall = scores.weighted_total()
    antipatterns = detect_antipatterns(steps)
    automation_ready = is_automation_ready(scores, antipatterns)

    logger.debug(
        "Analyzed scenario with %d steps: overall=%.2f antipatterns=%d automation_ready=%s",
        len(steps),
        overall,
        len(antipatterns),
        automation_ready,
    )
    return AnalysisResult(
        scores=scores,
        overall_score=overall,
        antipatterns=antipatterns,
        automation_ready=automation_ready,
        feedback=generate_feedback(scores, overall, antipatterns, automation_ready),
        step_count=len(steps),
    )


def review_status(result: AnalysisResult) -> ScenarioStatus:
    """Terminal review status for a submission derived from its analysis.

    Acceptance needs an automation-ready scenario as well as a score of 80.
    """
    if result.parse_error is not None or result.overall_score < REVISION_THRESHOLD:
        return ScenarioStatus.REJECTED
    if result.overall_score >= ACCEPTED_THRESHOLD and result.automation_ready:
        return ScenarioStatus.ACCEPTED
    return ScenarioStatus.REVISION_NEEDED


__all__ = [
    "AUTOMATION_GHERKIN_THRESHOLD",
    "AUTOMATION_MAX_ANTIPATTERNS",
    "AUTOMATION_TESTABILITY_THRESHOLD",
    "DIMENSION_FEEDBACK",
    "SCORE_BANDS",
    "WEIGHTS",
    "analyze",
    "generate_feedback",
    "is_automation_ready",
    "normalize_score",
    "review_status",
]
