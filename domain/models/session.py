"""
Session records - one logged real-world outcome per attempted or skipped
workout instance.

Records are persisted as camelCase JSON (``skipReason``, ``reflectionData``,
``exerciseProgress``) to stay compatible with existing snapshots; the
Python side uses snake_case attribute names.
"""

import datetime as dt
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.models.workout import WorkoutTemplate


class SessionStatus(str, Enum):
    """Outcome stored on a session record."""

    COMPLETED = "completed"
    SKIPPED = "skipped"


class DayStatus(str, Enum):
    """Status of a calendar day, derived from the ledger and the schedule."""

    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    REST = "rest"


class ReflectionData(BaseModel):
    """
    Subjective metadata attached to a session after the fact.

    The three-tag limit is enforced by the producer (request models), not
    here, so historic snapshots with more tags still load.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    effort: Optional[int] = Field(default=None, ge=1, le=10)
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    skip_reason: Optional[str] = Field(
        default=None, description="Only meaningful on skipped records"
    )
    timestamp: Optional[dt.datetime] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.effort is None
            and not self.tags
            and not self.notes
            and self.skip_reason is None
        )


class SessionRecord(BaseModel):
    """
    One entry of the ledger.

    ``workout`` is a by-value snapshot of the scheduled template. ``sequence``
    is assigned on append and gives a total order within a day.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str = Field(..., min_length=1)
    date: dt.datetime = Field(..., description="When the outcome was logged")
    workout: WorkoutTemplate
    status: SessionStatus
    streak: int = Field(default=0, ge=0, description="Streak at creation time")
    sequence: int = Field(default=0, ge=0)
    mood: Optional[str] = None
    notes: Optional[str] = None
    exercise_notes: Dict[str, str] = Field(default_factory=dict)
    skip_reason: Optional[str] = None
    reflection_data: Optional[ReflectionData] = None
    exercise_progress: Optional[Dict[str, List[bool]]] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Older snapshots stored numeric ids."""
        if isinstance(v, (int, float)):
            return str(int(v))
        return v

    @field_validator("reflection_data", mode="before")
    @classmethod
    def empty_reflection_to_none(cls, v: Any) -> Any:
        if v == {}:
            return None
        return v

    @property
    def day(self) -> dt.date:
        """
        Local calendar day of the record (time of day discarded).

        Snapshots written by the mobile app store UTC timestamps ("...Z");
        those are converted to local time before the day is taken.
        """
        if self.date.tzinfo is not None:
            return self.date.astimezone().date()
        return self.date.date()

    @property
    def workout_id(self) -> str:
        return self.workout.id

    @property
    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    @property
    def is_skipped(self) -> bool:
        return self.status == SessionStatus.SKIPPED

    def with_reflection(self, reflection: ReflectionData) -> "SessionRecord":
        """Return a copy with the reflection replaced (never merged)."""
        update: Dict[str, Any] = {"reflection_data": reflection}
        if reflection.notes is not None:
            update["notes"] = reflection.notes
        return self.model_copy(update=update)
