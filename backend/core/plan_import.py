"""
External plan import.

Validates the plan format produced by the onboarding generator and turns it
into a one-week repeating Program:

    {
      "programName": "Strength Basics",
      "weeks": 8,
      "schedule": [
        {"day": 1, "focus": "Lower body",
         "exercises": [{"name": "Squat", "sets": 3, "reps": "8-10", "notes": null}]}
      ],
      "progressionNotes": "Add 2.5 kg per week"
    }

``day`` is 1..7 with Monday = 1. Days missing from the schedule are rest days.
"""

import json
import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from application.exceptions import (
    IssueSeverity,
    PlanValidationError,
    ValidationIssue,
)
from domain.models import DAYS_PER_WEEK, ExerciseSpec, Program, ProgramWeek, WorkoutTemplate

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


# =============================================================================
# Wire schema
# =============================================================================


class PlanExercise(BaseModel):
    """One exercise line of a generated plan."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    sets: Optional[int] = Field(default=None, ge=1, le=20)
    reps: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Exercise name must not be blank")
        return stripped

    @field_validator("reps", mode="before")
    @classmethod
    def coerce_reps(cls, v: Any) -> Any:
        """Generators sometimes emit reps as a number."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v))
        return v

    @property
    def info(self) -> str:
        """Shorthand understood by ExerciseSpec, e.g. '3x8-10'."""
        if self.sets and self.reps:
            return f"{self.sets}x{self.reps}"
        if self.sets:
            return f"{self.sets} sets"
        return self.reps or ""


class PlanDay(BaseModel):
    """One training day of a generated plan."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    day: int = Field(..., ge=1, le=DAYS_PER_WEEK, description="1 = Monday")
    focus: str = Field(default="", max_length=200)
    exercises: List[PlanExercise] = Field(..., min_length=1)


class ExternalPlan(BaseModel):
    """Top-level generated plan."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    program_name: str = Field(..., min_length=1, max_length=200)
    weeks: int = Field(default=4, ge=1, le=104)
    schedule: List[PlanDay] = Field(..., min_length=1)
    progression_notes: Optional[str] = None

    @field_validator("schedule")
    @classmethod
    def validate_unique_days(cls, v: List[PlanDay]) -> List[PlanDay]:
        days = [entry.day for entry in v]
        duplicates = sorted({d for d in days if days.count(d) > 1})
        if duplicates:
            raise ValueError(f"Duplicate schedule days: {duplicates}")
        return v


# =============================================================================
# Parsing and validation
# =============================================================================


def slugify(value: str, default: str = "plan") -> str:
    return _SLUG_CHARS.sub("-", value.lower()).strip("-") or default


def extract_plan_json(text: str) -> Dict[str, Any]:
    """
    Pull the JSON object out of free-form generator output.

    Raises:
        PlanValidationError: If no parseable JSON object is present
    """
    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise PlanValidationError(
            "No JSON object found in plan text",
            [ValidationIssue("Expected a JSON object", location="$")],
        )
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise PlanValidationError(
            "Plan text is not valid JSON",
            [ValidationIssue(e.msg, location=f"char {e.pos}")],
        ) from e
    if not isinstance(data, dict):
        raise PlanValidationError(
            "Plan JSON must be an object",
            [ValidationIssue("Expected a JSON object", location="$")],
        )
    return data


def validate_plan(data: Union[Dict[str, Any], str]) -> Tuple[ExternalPlan, List[ValidationIssue]]:
    """
    Validate raw plan data.

    Args:
        data: Parsed plan dict, or generator text containing the JSON

    Returns:
        Tuple of (plan, warnings). Warnings do not block the import.

    Raises:
        PlanValidationError: If the plan is structurally invalid
    """
    if isinstance(data, str):
        data = extract_plan_json(data)

    try:
        plan = ExternalPlan.model_validate(data)
    except ValidationError as e:
        raise PlanValidationError.from_pydantic("Invalid plan data", e) from e

    warnings: List[ValidationIssue] = []
    for day_index, entry in enumerate(plan.schedule):
        for ex_index, exercise in enumerate(entry.exercises):
            if not exercise.info:
                warnings.append(
                    ValidationIssue(
                        f"Exercise '{exercise.name}' has no sets or reps",
                        severity=IssueSeverity.WARNING,
                        location=f"schedule.{day_index}.exercises.{ex_index}",
                    )
                )
    return plan, warnings


# =============================================================================
# Conversion
# =============================================================================


def _exercise_specs(entry: PlanDay) -> List[ExerciseSpec]:
    specs = []
    used: Dict[str, int] = {}
    for exercise in entry.exercises:
        base = slugify(exercise.name, default="exercise")
        used[base] = used.get(base, 0) + 1
        exercise_id = base if used[base] == 1 else f"{base}-{used[base]}"
        specs.append(
            ExerciseSpec(
                id=exercise_id,
                name=exercise.name,
                info=exercise.info,
                notes=exercise.notes,
            )
        )
    return specs


def plan_to_program(plan: ExternalPlan, start_date: date) -> Program:
    """
    Convert a validated plan into a one-week repeating Program.

    Each schedule entry becomes a template ``<program-slug>-day-<n>``; the
    first entry (by day) doubles as the fallback template.
    """
    program_id = slugify(plan.program_name)
    slots: List[Optional[str]] = [None] * DAYS_PER_WEEK
    templates: Dict[str, WorkoutTemplate] = {}

    for entry in sorted(plan.schedule, key=lambda e: e.day):
        template_id = f"{program_id}-day-{entry.day}"
        templates[template_id] = WorkoutTemplate(
            id=template_id,
            title=entry.focus or f"Day {entry.day}",
            subtitle=plan.program_name,
            exercises=_exercise_specs(entry),
        )
        slots[entry.day - 1] = template_id

    return Program(
        id=program_id,
        name=plan.program_name,
        start_date=start_date,
        weeks=[ProgramWeek(week=1, focus=plan.program_name, slots=slots)],
        templates=templates,
        fallback_template_id=next(iter(templates)),
        duration_weeks=plan.weeks,
        progression_notes=plan.progression_notes,
    )


def load_plan_or_default(
    data: Union[Dict[str, Any], str, None],
    default_program: Program,
    start_date: date,
) -> Program:
    """
    Build a Program from plan data, degrading to the default program.

    Malformed data is never fatal: the structured issues are logged and the
    default program is returned instead.
    """
    if data is None:
        logger.warning("No plan data received, using default program '%s'", default_program.id)
        return default_program

    try:
        plan, warnings = validate_plan(data)
    except PlanValidationError as e:
        logger.error(
            "Plan validation failed, using default program '%s': %s",
            default_program.id,
            [issue.as_dict() for issue in e.issues],
        )
        return default_program

    if warnings:
        logger.warning("Plan '%s' imported with warnings: %s", plan.program_name, [w.as_dict() for w in warnings])
    return plan_to_program(plan, start_date)
