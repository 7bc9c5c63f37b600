"""
Domain models for the training schedule service.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- WorkoutTemplate: Immutable bundle of exercises referenced by schedule slots
- ExerciseSpec: A single exercise with its set/rep or duration shorthand
- Program / ProgramWeek: The repeating multi-week schedule and its anchor
- SessionRecord: One logged outcome (completed or skipped)
- ReflectionData: Effort, tags and notes attached to a session
- DerivedStats / PhaseInfo: Values recomputed from the ledger or the calendar

Usage:
    >>> from domain.models import SessionRecord, SessionStatus, WorkoutTemplate

    >>> record = SessionRecord.model_validate(
    ...     {
    ...         "id": "1",
    ...         "date": "2025-01-06T18:00:00",
    ...         "status": "completed",
    ...         "workout": {"id": "push-day", "title": "Push Day"},
    ...     }
    ... )

    >>> # Serialize to the persisted camelCase format
    >>> payload = record.model_dump(mode="json", by_alias=True)
"""

from domain.models.exercise import ExerciseCategory, ExerciseSpec
from domain.models.program import DAYS_PER_WEEK, Program, ProgramWeek
from domain.models.session import (
    DayStatus,
    ReflectionData,
    SessionRecord,
    SessionStatus,
)
from domain.models.stats import DerivedStats, PhaseInfo
from domain.models.workout import WorkoutTemplate

__all__ = [
    # Main entities
    "WorkoutTemplate",
    "ExerciseSpec",
    "Program",
    "ProgramWeek",
    "SessionRecord",
    "ReflectionData",
    "DerivedStats",
    "PhaseInfo",
    # Enums
    "ExerciseCategory",
    "SessionStatus",
    "DayStatus",
    # Constants
    "DAYS_PER_WEEK",
]
