"""Step extraction for Given/When/Then scenario text."""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StepKeyword(str, Enum):
    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"


PRIMARY_KEYWORDS = (StepKeyword.GIVEN, StepKeyword.WHEN, StepKeyword.THEN)
CONTINUATION_KEYWORDS = (StepKeyword.AND, StepKeyword.BUT)

_KEYWORD_LOOKUP = {keyword.value.lower(): keyword for keyword in StepKeyword}
_STEP_PATTERN = re.compile(r"^(given|when|then|and|but)\s+(\S.*)$", re.IGNORECASE)
_KEYWORD_PREFIX = re.compile(r"^(given|when|then|and|but)\b", re.IGNORECASE)


class ParseErrorKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    NO_STEPS_FOUND = "no_steps_found"


class StepExtractionError(ValueError):
    """Raised when scenario text yields no usable steps."""

    MESSAGES = {
        ParseErrorKind.EMPTY_INPUT: "Scenario content is empty",
        ParseErrorKind.NO_STEPS_FOUND: "No Given/When/Then steps found",
    }

    def __init__(self, kind: ParseErrorKind) -> None:
        self.kind = kind
        super().__init__(self.MESSAGES[kind])


class Step(BaseModel):
    """One tagged step; ordering matters for the Gherkin order checks."""

    model_config = ConfigDict(frozen=True)

    keyword: StepKeyword
    text: str = Field(min_length=1)
    position: int = Field(ge=0)

    @property
    def line(self) -> str:
        return f"{self.keyword.value} {self.text}"


def _match_step(line: str) -> Optional[re.Match[str]]:
    return _STEP_PATTERN.match(line.strip())


def extract_steps(text: Optional[str]) -> List[Step]:
    if text is None or not text.strip():
        raise StepExtractionError(ParseErrorKind.EMPTY_INPUT)

    steps: List[Step] = []
    for raw_line in text.splitlines():
        match = _match_step(raw_line)
        if match is None:
            continue
        steps.append(
            Step(
                keyword=_KEYWORD_LOOKUP[match.group(1).lower()],
                text=match.group(2).strip(),
                position=len(steps),
            )
        )

    if not steps:
        raise StepExtractionError(ParseErrorKind.NO_STEPS_FOUND)
    return steps


def malformed_step_lines(text: Optional[str]) -> List[str]:
    """Lines that open with a step keyword but do not follow ``<Keyword> <text>``."""
    if not text:
        return []
    malformed: List[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if _KEYWORD_PREFIX.match(line) and _match_step(line) is None:
            malformed.append(line)
    return malformed


def assertion_steps(steps: List[Step]) -> List[Step]:
    """Then steps plus the And/But steps that continue them."""
    selected: List[Step] = []
    current: Optional[StepKeyword] = None
    for step in steps:
        if step.keyword in PRIMARY_KEYWORDS:
            current = step.keyword
        elif step.keyword not in CONTINUATION_KEYWORDS:
            continue
        if current is StepKeyword.THEN:
            selected.append(step)
    return selected


__all__ = [
    "CONTINUATION_KEYWORDS",
    "PRIMARY_KEYWORDS",
    "ParseErrorKind",
    "Step",
    "StepExtractionError",
    "StepKeyword",
    "assertion_steps",
    "extract_steps",
    "malformed_step_lines",
]
