"""Curriculum modules and the practice exercise catalog."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field


class DifficultyLevel(str, Enum):
    FOUNDATION = "foundation"  # complete user story, pre-defined structure, one happy path
    STANDARD = "standard"  # user story provided, two or three scenarios
    ADVANCED = "advanced"  # feature description only, comprehensive suite


class LearnerRole(str, Enum):
    DEVELOPER = "developer"
    TESTER = "tester"
    PRODUCT_OWNER = "product_owner"


class CurriculumModule(BaseModel):
    """Single module in the fixed curriculum, addressed by its sequence number."""

    module_number: int = Field(ge=1)
    title: str
    summary: str = ""
    estimated_hours: Optional[int] = Field(default=None, ge=1)
    passing_score: float = Field(default=70.0, ge=0.0, le=100.0)
    is_active: bool = True


class Exercise(BaseModel):
    """Practice exercise; ``target_role`` of None means every role."""

    exercise_id: str
    module_number: int = Field(ge=1)
    title: str
    difficulty: DifficultyLevel = DifficultyLevel.STANDARD
    target_role: Optional[LearnerRole] = None
    order_index: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class _ModuleTemplate:
    title: str
    summary: str
    estimated_hours: int


_MODULE_LIBRARY: Tuple[_ModuleTemplate, ...] = (
    _ModuleTemplate(
        title="BDD Fundamentals",
        summary="Collaboration-first discovery and the shared language behind behaviour specs.",
        estimated_hours=4,
    ),
    _ModuleTemplate(
        title="Gherkin Syntax and Patterns",
        summary="Given/When/Then structure, declarative steps and common anti-patterns.",
        estimated_hours=6,
    ),
    _ModuleTemplate(
        title="Role-Specific Training",
        summary="Scenario practice tailored to developers, testers and product owners.",
        estimated_hours=6,
    ),
    _ModuleTemplate(
        title="Practical Application",
        summary="End-to-end feature specification ready for automation.",
        estimated_hours=8,
    ),
)


def default_curriculum() -> List[CurriculumModule]:
    return [
        CurriculumModule(
            module_number=index,
            title=template.title,
            summary=template.summary,
            estimated_hours=template.estimated_hours,
        )
        for index, template in enumerate(_MODULE_LIBRARY, start=1)
    ]


def find_module(modules: Iterable[CurriculumModule], module_number: int) -> Optional[CurriculumModule]:
    for module in modules:
        if module.module_number == module_number:
            return module
    return None


class ExerciseCatalog:
    """Read-only exercise lookup preserving catalog order."""

    def __init__(self, exercises: Iterable[Exercise] = ()) -> None:
        indexed = list(enumerate(exercises))
        indexed.sort(key=lambda entry: (entry[1].module_number, entry[1].order_index, entry[0]))
        self._exercises: List[Exercise] = [exercise for _, exercise in indexed]

    def query(
        self,
        module_number: int,
        *,
        difficulty: Optional[DifficultyLevel] = None,
        role: Optional[LearnerRole] = None,
    ) -> List[Exercise]:
        return [
            exercise
            for exercise in self._exercises
            if exercise.is_active
            and exercise.module_number == module_number
            and (difficulty is None or exercise.difficulty == difficulty)
            and (role is None or exercise.target_role is None or exercise.target_role == role)
        ]


__all__ = [
    "CurriculumModule",
    "DifficultyLevel",
    "Exercise",
    "ExerciseCatalog",
    "LearnerRole",
    "default_curriculum",
    "find_module",
]
