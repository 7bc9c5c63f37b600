"""
Session Schemas for the ledger API.

Request models enforce the producer-side limits on reflection data (at most
three tags, effort 1-10); the ledger itself accepts whatever it is given.

Schemas for:
- ReflectionInput / SetReflectionRequest: PUT /sessions/reflection
- CompleteWorkoutRequest: POST /sessions/complete
- SkipWorkoutRequest: POST /sessions/skip
- MutationResponse, HistoryResponse, StreakResponse
"""

import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from application.use_cases import MutationResult
from backend.core.constants import (
    MAX_EFFORT,
    MAX_NOTES_LENGTH,
    MAX_REFLECTION_TAGS,
    MIN_EFFORT,
    SKIP_REASONS,
)
from domain.models import DerivedStats, ReflectionData, SessionRecord


class ReflectionInput(BaseModel):
    """Effort, tags and notes as entered by the user."""
    effort: Optional[int] = Field(
        default=None,
        ge=MIN_EFFORT,
        le=MAX_EFFORT,
        description="Perceived effort on a 1-10 scale",
    )
    tags: List[str] = Field(
        default_factory=list,
        max_length=MAX_REFLECTION_TAGS,
        description="Up to three short tags",
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=MAX_NOTES_LENGTH,
        description="Free-text notes; may mention an exercise by name",
    )

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        """Strip, drop blanks and de-duplicate while keeping order."""
        cleaned: List[str] = []
        for tag in v:
            tag = tag.strip()
            if not tag:
                continue
            if len(tag) > 40:
                raise ValueError(f"Tag too long: '{tag[:40]}...'")
            if tag not in cleaned:
                cleaned.append(tag)
        return cleaned

    def to_reflection(self, skip_reason: Optional[str] = None) -> ReflectionData:
        return ReflectionData(
            effort=self.effort,
            tags=self.tags,
            notes=self.notes,
            skip_reason=skip_reason,
        )


class SetReflectionRequest(ReflectionInput):
    """Request body for PUT /sessions/reflection."""
    workout_id: Optional[str] = Field(
        default=None,
        description="Workout the reflection belongs to (needed on multi-workout days)",
    )
    record_id: Optional[str] = Field(
        default=None,
        description="Exact session record to update",
    )


class CompleteWorkoutRequest(BaseModel):
    """Request body for POST /sessions/complete."""
    exercise_progress: Dict[str, List[bool]] = Field(
        default_factory=dict,
        description="Exercise id -> per-set completion flags",
    )
    workout_id: Optional[str] = Field(
        default=None,
        description="Which of today's workouts was done; defaults to the first",
    )
    mood: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    exercise_notes: Dict[str, str] = Field(default_factory=dict)
    reflection: Optional[ReflectionInput] = None


class SkipWorkoutRequest(BaseModel):
    """Request body for POST /sessions/skip."""
    reason: str = Field(..., description=f"One of: {', '.join(SKIP_REASONS)}")
    workout_id: Optional[str] = None
    reflection: Optional[ReflectionInput] = None

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v: str) -> str:
        reason = v.strip().lower()
        if reason not in SKIP_REASONS:
            raise ValueError(
                f"Unknown skip reason '{v}'. Must be one of: {', '.join(SKIP_REASONS)}"
            )
        return reason


class MutationResponse(BaseModel):
    """Response for every ledger mutation."""
    success: bool
    record: Optional[SessionRecord] = None
    removed: int = 0
    streak: int = 0
    stats: Optional[DerivedStats] = None
    persistence_warning: Optional[str] = None

    @classmethod
    def from_result(cls, result: MutationResult) -> "MutationResponse":
        return cls(
            success=result.success,
            record=result.record,
            removed=result.removed,
            streak=result.streak,
            stats=result.stats,
            persistence_warning=result.persistence_warning,
        )


class HistoryResponse(BaseModel):
    """Response for GET /sessions."""
    records: List[SessionRecord]
    count: int


class StreakResponse(BaseModel):
    """Response for GET /sessions/streak."""
    streak: int
    today: dt.date
