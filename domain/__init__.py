"""
Domain layer for the training schedule service.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    DayStatus,
    DerivedStats,
    ExerciseCategory,
    ExerciseSpec,
    PhaseInfo,
    Program,
    ProgramWeek,
    ReflectionData,
    SessionRecord,
    SessionStatus,
    WorkoutTemplate,
)

__all__ = [
    "DayStatus",
    "DerivedStats",
    "ExerciseCategory",
    "ExerciseSpec",
    "PhaseInfo",
    "Program",
    "ProgramWeek",
    "ReflectionData",
    "SessionRecord",
    "SessionStatus",
    "WorkoutTemplate",
]
