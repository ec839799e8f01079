"""Six-dimension scenario quality rubric.

Every scorer is a pure function of the extracted steps. Scores live on the
0-100 scale: each scorer starts from a base value, applies additive penalties
and bonuses, then clamps to ``[MIN_SCORE, MAX_SCORE]``.
"""

from __future__ import annotations

import re
from typing import FrozenSet, Iterable, List, Sequence, Set

from .scenario_steps import Step, StepKeyword, assertion_steps

MIN_SCORE = 0.0
MAX_SCORE = 100.0

MAX_STEP_WORDS = 15
NEAR_DUPLICATE_SIMILARITY = 0.8

VAGUE_TERMS: FrozenSet[str] = frozenset(
    {
        "properly",
        "correctly",
        "successfully",
        "appropriately",
        "adequately",
        "efficiently",
        "quickly",
        "slowly",
        "well",
        "badly",
    }
)

UI_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "click",
        "button",
        "textbox",
        "dropdown",
        "checkbox",
        "radio",
        "menu",
        "link",
        "icon",
        "navigate",
        "scroll",
        "drag",
        "hover",
    }
)

IMPLEMENTATION_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "database",
        "api",
        "rest",
        "json",
        "xml",
        "sql",
        "http",
        "get",
        "post",
        "put",
        "delete",
        "endpoint",
        "service",
        "repository",
        "controller",
    }
)

USER_FOCUS_TERMS: FrozenSet[str] = frozenset(
    {"user", "users", "customer", "customers", "i", "me", "my", "we", "our"}
)
AMBIGUOUS_QUANTIFIERS: FrozenSet[str] = frozenset({"something", "anything", "some", "any"})
GENERIC_TERMS: FrozenSet[str] = frozenset(
    {"something", "anything", "some", "any", "several", "few", "many"}
)
OUTCOME_TERMS: FrozenSet[str] = frozenset({"should", "must", "is", "are"})

_WORD = re.compile(r"[A-Za-z0-9_]+")
_NUMBER = re.compile(r"\d")
_QUOTED = re.compile(r"\"[^\"]+\"|(?<!\S)'[^']+'(?!\w)")
_CAMEL_CASE = re.compile(r"[a-z][A-Z]")


def tokens(text: str) -> Set[str]:
    return {token.lower() for token in _WORD.findall(text)}


def matched_terms(step: Step, vocabulary: Iterable[str]) -> List[str]:
    """Vocabulary entries present in the step, sorted for stable output."""
    return sorted(tokens(step.text) & set(vocabulary))


def word_count(step: Step) -> int:
    return len(step.line.split())


def is_overlong(step: Step) -> bool:
    return word_count(step) > MAX_STEP_WORDS


def has_technical_token(step: Step) -> bool:
    return "_" in step.text or bool(_CAMEL_CASE.search(step.text))


def has_concrete_value(step: Step) -> bool:
    return bool(_NUMBER.search(step.text) or _QUOTED.search(step.text))


def keywords_present(steps: Sequence[Step]) -> Set[StepKeyword]:
    return {step.keyword for step in steps}


def _clamp(score: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def score_clarity(steps: Sequence[Step]) -> float:
    score = 90.0
    for step in steps:
        score -= 4.0 * len(matched_terms(step, VAGUE_TERMS))
        if is_overlong(step):
            score -= 6.0
        if has_technical_token(step):
            score -= 4.0
    present = keywords_present(steps)
    if {StepKeyword.GIVEN, StepKeyword.WHEN, StepKeyword.THEN} <= present:
        score += 5.0
    if len(steps) > 1:
        score += 5.0
    return _clamp(score)


def score_business_value(steps: Sequence[Step]) -> float:
    score = 90.0
    for step in steps:
        score -= 10.0 * len(matched_terms(step, UI_KEYWORDS))
        score -= 8.0 * len(matched_terms(step, IMPLEMENTATION_KEYWORDS))
    if any(matched_terms(step, USER_FOCUS_TERMS) for step in steps):
        score += 10.0
    return _clamp(score)


def _first_position(steps: Sequence[Step], keyword: StepKeyword) -> int:
    for step in steps:
        if step.keyword is keyword:
            return step.position
    return -1


def score_gherkin(steps: Sequence[Step], malformed_lines: int = 0) -> float:
    score = 90.0
    positions = [
        _first_position(steps, keyword)
        for keyword in (StepKeyword.GIVEN, StepKeyword.WHEN, StepKeyword.THEN)
    ]
    score -= 30.0 * sum(1 for position in positions if position < 0)
    given, when, then = positions
    if 0 <= given < when < then:
        score += 10.0
    score -= 10.0 * max(malformed_lines, 0)
    return _clamp(score)


def score_testability(steps: Sequence[Step]) -> float:
    score = 100.0
    if StepKeyword.THEN not in keywords_present(steps):
        score -= 40.0
    assertions = assertion_steps(list(steps))
    concrete = any(
        _NUMBER.search(step.text) or matched_terms(step, OUTCOME_TERMS) for step in assertions
    )
    if assertions and not concrete:
        score -= 20.0
    for step in assertions:
        if matched_terms(step, AMBIGUOUS_QUANTIFIERS):
            score -= 10.0
    return _clamp(score)


def score_specificity(steps: Sequence[Step]) -> float:
    score = 100.0
    for step in steps:
        score -= 6.0 * len(matched_terms(step, GENERIC_TERMS))
        if not has_concrete_value(step):
            score -= 4.0
    return _clamp(score)


def levenshtein_distance(left: str, right: str) -> int:
    if len(left) < len(right):
        left, right = right, left
    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        current = [i]
        for j, right_char in enumerate(right, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (left_char != right_char),
                )
            )
        previous = current
    return previous[-1]


def similarity(left: str, right: str) -> float:
    """Edit-distance similarity normalised by the longer string's length."""
    longer = max(len(left), len(right))
    if longer == 0:
        return 1.0
    return (longer - levenshtein_distance(left, right)) / longer


def _normalized(step: Step) -> str:
    return " ".join(step.line.lower().split())


def score_duplication(steps: Sequence[Step]) -> float:
    score = 100.0
    lines = [step.line for step in steps]
    score -= 10.0 * (len(lines) - len(set(lines)))

    normalized = [_normalized(step) for step in steps]
    for i in range(len(normalized)):
        for j in range(i + 1, len(normalized)):
            if similarity(normalized[i], normalized[j]) > NEAR_DUPLICATE_SIMILARITY:
                score -= 6.0
    return _clamp(score)


__all__ = [
    "AMBIGUOUS_QUANTIFIERS",
    "GENERIC_TERMS",
    "IMPLEMENTATION_KEYWORDS",
    "MAX_SCORE",
    "MAX_STEP_WORDS",
    "MIN_SCORE",
    "NEAR_DUPLICATE_SIMILARITY",
    "UI_KEYWORDS",
    "VAGUE_TERMS",
    "has_technical_token",
    "is_overlong",
    "keywords_present",
    "levenshtein_distance",
    "matched_terms",
    "score_business_value",
    "score_clarity",
    "score_duplication",
    "score_gherkin",
    "score_specificity",
    "score_testability",
    "similarity",
]
