"""
Program - the repeating multi-week schedule anchored to a start date.

A Program is a list of weeks (cycle length L); every week has exactly
seven slots, Monday first. A slot holds a template id or None for rest.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.models.workout import WorkoutTemplate

DAYS_PER_WEEK = 7


class ProgramWeek(BaseModel):
    """One week of slots. ``slots[0]`` is Monday, ``slots[6]`` is Sunday."""

    model_config = ConfigDict(frozen=True)

    week: int = Field(..., ge=1, description="1-based week number within the cycle")
    focus: str = Field(default="", description="Theme of the week")
    slots: List[Optional[str]] = Field(
        ..., description="Template id per weekday, None for rest"
    )

    @field_validator("slots")
    @classmethod
    def validate_slot_count(cls, v: List[Optional[str]]) -> List[Optional[str]]:
        if len(v) != DAYS_PER_WEEK:
            raise ValueError(
                f"A week must have exactly {DAYS_PER_WEEK} slots, got {len(v)}"
            )
        return v

    @property
    def rest_days(self) -> int:
        return sum(1 for slot in self.slots if slot is None)


class Program(BaseModel):
    """
    Aggregate for the schedule configuration.

    Loaded once at startup and read-only afterwards.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    start_date: date = Field(..., description="Anchor date; slot 0 of week 1")
    weeks: List[ProgramWeek] = Field(..., min_length=1)
    templates: Dict[str, WorkoutTemplate] = Field(default_factory=dict)
    fallback_template_id: Optional[str] = Field(
        default=None,
        description="Template used when a session is logged on a rest day",
    )
    duration_weeks: Optional[int] = Field(
        default=None, ge=1, description="Planned length, informational only"
    )
    progression_notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_references(self) -> "Program":
        """Every slot and the fallback must reference a known template."""
        for week in self.weeks:
            for day_index, slot in enumerate(week.slots):
                if slot is not None and slot not in self.templates:
                    raise ValueError(
                        f"Week {week.week}, day {day_index} references unknown "
                        f"template '{slot}'"
                    )
        if (
            self.fallback_template_id is not None
            and self.fallback_template_id not in self.templates
        ):
            raise ValueError(
                f"Unknown fallback template '{self.fallback_template_id}'"
            )
        return self

    @property
    def cycle_weeks(self) -> int:
        """Cycle length L in weeks."""
        return len(self.weeks)

    @property
    def cycle_days(self) -> int:
        return self.cycle_weeks * DAYS_PER_WEEK

    @property
    def fallback_template(self) -> Optional[WorkoutTemplate]:
        if self.fallback_template_id is None:
            return None
        return self.templates[self.fallback_template_id]

    def template(self, template_id: str) -> Optional[WorkoutTemplate]:
        return self.templates.get(template_id)

    def with_start_date(self, start_date: date) -> "Program":
        """Return a copy anchored to another date."""
        return self.model_copy(update={"start_date": start_date})
