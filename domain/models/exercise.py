"""
Exercise value object for workout templates.

An exercise carries a free-text ``info`` shorthand that encodes the
prescription, e.g. "4x8 @ 70 kg", "3x8-12", "25 min @ zone 2" or "3x45 sec".
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Upper bound on set circles tracked per exercise
MAX_TRACKED_SETS = 4

_SETS_PREFIX = re.compile(r"^\s*(\d+)\s*x", re.IGNORECASE)


class ExerciseCategory(str, Enum):
    """Position of an exercise within a session."""

    WARMUP = "warmup"
    MAIN = "main"
    COOLDOWN = "cooldown"


class ExerciseSpec(BaseModel):
    """
    Value object representing one exercise of a workout template.

    Examples:
        >>> ExerciseSpec(id="bench-press", name="Bench Press", info="4x8 @ 70 kg").set_count
        4

        >>> ExerciseSpec(id="plank", name="Plank", info="3x45 sec").set_count
        1
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable exercise identifier")
    name: str = Field(..., min_length=1, description="Display name")
    info: str = Field(
        default="",
        description="Set/rep or duration shorthand (e.g. '3x10', '15 min')",
    )
    category: ExerciseCategory = Field(
        default=ExerciseCategory.MAIN, description="warmup | main | cooldown"
    )
    notes: Optional[str] = Field(default=None, description="Coaching cue")

    @property
    def is_timed(self) -> bool:
        """Check if the prescription is time based."""
        lowered = self.info.lower()
        return "min" in lowered or "sec" in lowered

    @property
    def set_count(self) -> int:
        """
        Number of set circles to track for this exercise.

        Time-based and range-rep prescriptions ("3x8-12") track a single
        circle; fixed reps track one circle per set, capped at
        MAX_TRACKED_SETS.

        Returns:
            Number of trackable sets (at least 1).
        """
        if not self.info or self.is_timed or "x" not in self.info.lower():
            return 1

        match = _SETS_PREFIX.match(self.info)
        if not match:
            return 1

        _, _, reps = self.info.lower().partition("x")
        if "-" in reps:
            return 1

        return max(1, min(int(match.group(1)), MAX_TRACKED_SETS))
