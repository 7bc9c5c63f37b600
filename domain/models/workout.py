"""
Workout template - the immutable unit referenced by schedule slots.

Templates are defined once (program configuration or plan import) and are
never mutated afterwards. Session records keep a snapshot copy so later
template edits cannot rewrite history.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.models.exercise import ExerciseCategory, ExerciseSpec


class WorkoutTemplate(BaseModel):
    """
    Named bundle of exercises.

    Examples:
        >>> template = WorkoutTemplate(
        ...     id="push-day",
        ...     title="Push Day",
        ...     subtitle="Chest, Shoulders & Triceps",
        ...     duration="55 min",
        ...     exercises=[ExerciseSpec(id="bench-press", name="Bench Press", info="4x8")],
        ... )
        >>> template.exercise_count
        1
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str = Field(..., min_length=1, description="Template identifier")
    title: str = Field(..., min_length=1, max_length=200, description="Workout title")
    subtitle: str = Field(default="", description="Short description")
    duration: str = Field(default="", description="Estimated duration, e.g. '55 min'")
    purpose: Optional[str] = Field(default=None, description="Why this session exists")
    target_effort: Optional[int] = Field(
        default=None, ge=1, le=10, description="Intended effort on a 1-10 scale"
    )
    exercises: List[ExerciseSpec] = Field(
        default_factory=list, description="Ordered exercise list"
    )

    @field_validator("exercises")
    @classmethod
    def validate_unique_exercise_ids(cls, v: List[ExerciseSpec]) -> List[ExerciseSpec]:
        """Exercise ids key the progress map, so they must be unique."""
        seen = set()
        for exercise in v:
            if exercise.id in seen:
                raise ValueError(f"Duplicate exercise id '{exercise.id}'")
            seen.add(exercise.id)
        return v

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    @property
    def exercise_ids(self) -> List[str]:
        return [exercise.id for exercise in self.exercises]

    def exercises_in(self, category: ExerciseCategory) -> List[ExerciseSpec]:
        """Get exercises of one category, preserving order."""
        return [e for e in self.exercises if e.category == category]

    def find_exercise(self, name_or_id: str) -> Optional[ExerciseSpec]:
        """Look up an exercise by id or case-insensitive name."""
        needle = name_or_id.strip().lower()
        for exercise in self.exercises:
            if exercise.id == name_or_id or exercise.name.lower() == needle:
                return exercise
        return None

    def empty_progress(self) -> Dict[str, List[bool]]:
        """Progress map with every tracked set unchecked."""
        return {e.id: [False] * e.set_count for e in self.exercises}
