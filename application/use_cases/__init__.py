"""
Application Use Cases for the training schedule service.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and ports
- Dependencies are injected via constructors for testability
- Use cases return domain models and result dataclasses, not API responses

Usage:
    from application.use_cases import (
        TrainingStore,
        GetScheduleUseCase,
        ImportPlanUseCase,
    )

    # One store per process
    store = TrainingStore(kv_store=kv_store, clock=SystemClock(), program=program)
    store.load()

    # Log a session
    result = store.complete_workout({"bench-press": [True, True, False, False]})

    # Calendar views
    schedule = GetScheduleUseCase(store=store, phase_classifier=PhaseClassifier())
    week = schedule.week_overview(date.today())
"""

from application.use_cases.training_store import (
    MutationResult,
    RetryPolicy,
    TrainingSnapshot,
    TrainingStore,
)
from application.use_cases.get_schedule import (
    DayOverview,
    GetScheduleUseCase,
    MonthOverview,
    WeekOverview,
)
from application.use_cases.import_plan import ImportPlanResult, ImportPlanUseCase

__all__ = [
    # Store
    "TrainingStore",
    "TrainingSnapshot",
    "MutationResult",
    "RetryPolicy",
    # Schedule views
    "GetScheduleUseCase",
    "DayOverview",
    "WeekOverview",
    "MonthOverview",
    # Plan import
    "ImportPlanUseCase",
    "ImportPlanResult",
]
