"""Unit tests for domain models and their persisted format."""
from datetime import date, datetime

import pytest
from pydantic import ValidationError

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
from tests.fakes import create_program, create_template


@pytest.mark.unit
class TestExerciseSpec:
    @pytest.mark.parametrize(
        "info,expected",
        [
            ("4x8 @ 70 kg", 4),
            ("3x10", 3),
            ("6x5", 4),  # capped
            ("3x8-12", 1),  # rep range
            ("3x45 sec", 1),  # timed
            ("25 min @ zone 2", 1),
            ("", 1),
            ("AMRAP", 1),
        ],
    )
    def test_set_count(self, info, expected):
        assert ExerciseSpec(id="e", name="E", info=info).set_count == expected

    def test_is_timed(self):
        assert ExerciseSpec(id="run", name="Run", info="20 min").is_timed
        assert not ExerciseSpec(id="squat", name="Squat", info="5x5").is_timed

    def test_defaults_to_main(self):
        assert ExerciseSpec(id="e", name="E").category == ExerciseCategory.MAIN

    def test_frozen(self):
        spec = ExerciseSpec(id="e", name="E")
        with pytest.raises(ValidationError):
            spec.name = "Other"


@pytest.mark.unit
class TestWorkoutTemplate:
    def test_duplicate_exercise_ids_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate exercise id"):
            WorkoutTemplate(
                id="t",
                title="T",
                exercises=[ExerciseSpec(id="a", name="A"), ExerciseSpec(id="a", name="B")],
            )

    def test_find_exercise_by_id_or_name(self):
        template = create_template("push-day")
        assert template.find_exercise("push-day-main").name == "Main Lift"
        assert template.find_exercise("main lift").id == "push-day-main"
        assert template.find_exercise("missing") is None

    def test_exercises_in_category(self):
        template = create_template("push-day")
        assert [e.id for e in template.exercises_in(ExerciseCategory.WARMUP)] == ["light-cardio"]

    def test_empty_progress(self):
        progress = create_template("push-day").empty_progress()
        assert progress["push-day-main"] == [False] * 4
        assert progress["push-day-accessory"] == [False]

    def test_camel_case_aliases(self):
        template = WorkoutTemplate.model_validate(
            {"id": "evening-cardio", "title": "Evening Cardio", "targetEffort": 6}
        )
        assert template.target_effort == 6
        assert "targetEffort" in template.model_dump(by_alias=True)


@pytest.mark.unit
class TestProgram:
    def test_week_needs_seven_slots(self):
        with pytest.raises(ValidationError, match="exactly 7 slots"):
            ProgramWeek(week=1, slots=["a", None])

    def test_unknown_slot_reference_rejected(self):
        with pytest.raises(ValidationError, match="unknown template 'missing'"):
            Program(
                id="p",
                name="P",
                start_date=date(2025, 1, 6),
                weeks=[ProgramWeek(week=1, slots=["missing"] + [None] * 6)],
            )

    def test_unknown_fallback_rejected(self):
        with pytest.raises(ValidationError, match="Unknown fallback"):
            Program(
                id="p",
                name="P",
                start_date=date(2025, 1, 6),
                weeks=[ProgramWeek(week=1, slots=[None] * 7)],
                fallback_template_id="missing",
            )

    def test_cycle_length(self):
        program = create_program()
        assert program.cycle_weeks == 4
        assert program.cycle_days == 28
        assert program.fallback_template.id == "full-body"

    def test_with_start_date(self):
        program = create_program()
        moved = program.with_start_date(date(2025, 3, 3))
        assert moved.start_date == date(2025, 3, 3)
        assert program.start_date == date(2025, 1, 6)


@pytest.mark.unit
class TestSessionRecord:
    def test_loads_persisted_camel_case(self):
        record = SessionRecord.model_validate(
            {
                "id": 1736186400000,
                "date": "2025-01-06T18:00:00",
                "workout": {"id": "push-day", "title": "Push Day"},
                "status": "skipped",
                "skipReason": "tired",
                "reflectionData": {"effort": 3, "tags": ["sore"], "skipReason": "tired"},
            }
        )
        assert record.id == "1736186400000"
        assert record.is_skipped
        assert record.skip_reason == "tired"
        assert record.reflection_data.effort == 3
        assert record.day == date(2025, 1, 6)

    def test_empty_reflection_is_none(self):
        record = SessionRecord.model_validate(
            {
                "id": "1",
                "date": "2025-01-06T18:00:00",
                "workout": {"id": "push-day", "title": "Push Day"},
                "status": "completed",
                "reflectionData": {},
            }
        )
        assert record.reflection_data is None

    def test_with_reflection_replaces(self):
        record = SessionRecord(
            id="1",
            date=datetime(2025, 1, 6, 18),
            workout=create_template("push-day"),
            status=SessionStatus.COMPLETED,
            notes="old",
            reflection_data=ReflectionData(effort=2, tags=["a"]),
        )
        updated = record.with_reflection(ReflectionData(effort=9, notes="new"))
        assert updated.reflection_data.tags == []
        assert updated.notes == "new"
        assert record.reflection_data.effort == 2

    def test_reflection_is_empty(self):
        assert ReflectionData().is_empty
        assert not ReflectionData(effort=5).is_empty
