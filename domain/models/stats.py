"""
Derived statistics and phase framing.

Neither is a source of truth: both are recomputed from the ledger or the
calendar whenever they are needed.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DerivedStats(BaseModel):
    """Aggregate counters over the ledger. Persisted only as a cache."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    total_completed: int = Field(default=0, ge=0)
    this_month_completed: int = Field(default=0, ge=0)
    completion_rate: int = Field(
        default=0, ge=0, le=100, description="Rounded percentage of completed vs logged"
    )


class PhaseInfo(BaseModel):
    """Display-only framing of elapsed program time."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    week_number: int = Field(..., ge=1)
    phase_label: str
    progress_percent: float = Field(..., ge=0, le=100)
    total_weeks: int = Field(..., ge=1)
    phases: List[str] = Field(default_factory=list)
    phase_boundaries: List[float] = Field(default_factory=list)
    phase_index: Optional[int] = None
