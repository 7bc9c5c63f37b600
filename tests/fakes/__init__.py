"""
Fake Implementations and Factories for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No database or external dependencies
required.

Features:
- Fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data and reset() for test isolation
- Factory functions for templates, programs, records and stores

Usage:
    from tests.fakes import FakeKeyValueStore, FixedClock, create_program

    program = create_program()            # 4-week cycle anchored 2025-01-06
    store = create_training_store(program=program)
"""
from datetime import date, datetime, time
from typing import List, Optional

from application.use_cases import RetryPolicy, TrainingStore
from domain.models import (
    ExerciseCategory,
    ExerciseSpec,
    Program,
    ProgramWeek,
    ReflectionData,
    SessionRecord,
    SessionStatus,
    WorkoutTemplate,
)
from tests.fakes.clock import FixedClock
from tests.fakes.key_value_store import FakeKeyValueStore

# Monday; week 1 day 0 is push-day, day 3 is rest
ANCHOR = date(2025, 1, 6)

# Wednesday of week 2 (push-day)
TODAY = datetime(2025, 1, 15, 18, 0)

NO_WAIT_RETRY = RetryPolicy(
    max_attempts=3,
    min_wait_seconds=0,
    max_wait_seconds=0,
    timeout_seconds=5,
)

DEFAULT_WEEKS: List[List[Optional[str]]] = [
    ["push-day", "cardio", "pull-day", None, "leg-day", "cardio", None],
    ["full-body", "cardio", "push-day", None, "pull-day", "leg-day", None],
    ["push-day", "pull-day", "leg-day", None, "cardio", "full-body", None],
    ["cardio", None, "full-body", None, "cardio", None, None],
]


# =============================================================================
# Factory Functions
# =============================================================================


def create_template(
    template_id: str,
    *,
    title: Optional[str] = None,
    exercises: Optional[List[ExerciseSpec]] = None,
) -> WorkoutTemplate:
    """Create a WorkoutTemplate with a warmup, two main lifts and a cooldown."""
    if exercises is None:
        exercises = [
            ExerciseSpec(id="light-cardio", name="Light Cardio", info="5 min", category=ExerciseCategory.WARMUP),
            ExerciseSpec(id=f"{template_id}-main", name="Main Lift", info="4x8 @ 70 kg"),
            ExerciseSpec(id=f"{template_id}-accessory", name="Accessory", info="3x8-12"),
            ExerciseSpec(id="static-stretch", name="Static Stretches", info="5 min", category=ExerciseCategory.COOLDOWN),
        ]
    return WorkoutTemplate(
        id=template_id,
        title=title or template_id.replace("-", " ").title(),
        duration="45 min",
        exercises=exercises,
    )


def create_program(
    *,
    program_id: str = "test-program",
    start_date: date = ANCHOR,
    weeks: Optional[List[List[Optional[str]]]] = None,
) -> Program:
    """
    Create a repeating test program (DEFAULT_WEEKS unless ``weeks`` is given).

    Every referenced template id plus ``evening-cardio`` gets a template;
    ``full-body`` is the fallback.
    """
    weeks = weeks if weeks is not None else DEFAULT_WEEKS
    template_ids = {"full-body", "evening-cardio"}
    for week in weeks:
        template_ids.update(slot for slot in week if slot)

    return Program(
        id=program_id,
        name=program_id.replace("-", " ").title(),
        start_date=start_date,
        weeks=[
            ProgramWeek(week=index + 1, focus=f"Week {index + 1}", slots=slots)
            for index, slots in enumerate(weeks)
        ],
        templates={tid: create_template(tid) for tid in sorted(template_ids)},
        fallback_template_id="full-body",
    )


def create_record(
    day: date,
    *,
    status: SessionStatus = SessionStatus.COMPLETED,
    workout: Optional[WorkoutTemplate] = None,
    record_id: Optional[str] = None,
    sequence: int = 0,
    hour: int = 18,
    reflection: Optional[ReflectionData] = None,
    skip_reason: Optional[str] = None,
) -> SessionRecord:
    """Create a SessionRecord logged on ``day``."""
    return SessionRecord(
        id=record_id or f"{day.isoformat()}-{status.value}-{sequence}",
        date=datetime.combine(day, time(hour, 0)),
        workout=workout or create_template("push-day"),
        status=status,
        sequence=sequence,
        reflection_data=reflection,
        skip_reason=skip_reason,
    )


def create_training_store(
    *,
    program: Optional[Program] = None,
    kv_store: Optional[FakeKeyValueStore] = None,
    clock: Optional[FixedClock] = None,
    secondary_template_id: Optional[str] = None,
    strict_merge: bool = True,
    load: bool = True,
) -> TrainingStore:
    """Create a TrainingStore wired to fakes, with retries that never sleep."""
    store = TrainingStore(
        kv_store=kv_store if kv_store is not None else FakeKeyValueStore(),
        clock=clock or FixedClock(TODAY),
        program=program or create_program(),
        secondary_template_id=secondary_template_id,
        strict_merge=strict_merge,
        retry_policy=NO_WAIT_RETRY,
    )
    if load:
        store.load()
    return store


__all__ = [
    "FakeKeyValueStore",
    "FixedClock",
    "ANCHOR",
    "TODAY",
    "NO_WAIT_RETRY",
    "DEFAULT_WEEKS",
    "create_template",
    "create_program",
    "create_record",
    "create_training_store",
]
