"""
Phase classifier for display framing.

Labels elapsed program time with a coarse phase and a progress value. The
phase plan has its own length (16 weeks by default, non-repeating) that is
deliberately independent of the schedule resolver's repeating cycle.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from backend.core.calendar_utils import DateLike, elapsed_days
from backend.core.constants import DEFAULT_PHASE_TOTAL_WEEKS
from domain.models import DAYS_PER_WEEK, PhaseInfo

logger = logging.getLogger(__name__)


class TrainingPhase(str, Enum):
    """Phases of the linear plan, in order."""

    BUILD = "Build Phase"
    BASE = "Base Phase"
    PEAK = "Peak Phase"
    TAPER = "Taper Phase"


class PhaseClassifier:
    """
    Step function from week number to phase label.

    Each phase covers one quarter of ``total_weeks``; with 16 weeks that is
    weeks 1-4 build, 5-8 base, 9-12 peak and 13-16 taper.
    """

    def __init__(
        self,
        total_weeks: int = DEFAULT_PHASE_TOTAL_WEEKS,
        labels: Sequence[str] = tuple(phase.value for phase in TrainingPhase),
    ) -> None:
        if total_weeks < 1:
            raise ValueError(f"total_weeks must be >= 1, got {total_weeks}")
        if not labels:
            raise ValueError("At least one phase label is required")
        self.total_weeks = total_weeks
        self.labels: List[str] = list(labels)

    @property
    def boundaries(self) -> List[float]:
        """Phase boundaries in percent, e.g. [0, 25, 50, 75, 100]."""
        count = len(self.labels)
        return [round(100 * i / count, 2) for i in range(count + 1)]

    def week_number(self, target: DateLike, anchor: DateLike) -> Optional[int]:
        """
        1-based week of the plan, or None outside ``[1, total_weeks]``.
        """
        days = elapsed_days(anchor, target)
        week = days // DAYS_PER_WEEK + 1
        if week < 1 or week > self.total_weeks:
            return None
        return week

    def phase_index(self, week: int) -> int:
        count = len(self.labels)
        return min((week - 1) * count // self.total_weeks, count - 1)

    def phase_for_week(self, week: Optional[int]) -> Optional[str]:
        if week is None or week < 1 or week > self.total_weeks:
            return None
        return self.labels[self.phase_index(week)]

    def progress_percent(self, week: int) -> float:
        return min(week / self.total_weeks * 100, 100.0)

    def classify(self, target: DateLike, anchor: DateLike) -> Optional[PhaseInfo]:
        """
        Classify a date relative to the program anchor.

        Args:
            target: Date being displayed
            anchor: Program start date

        Returns:
            PhaseInfo, or None when the date falls outside the plan.
        """
        week = self.week_number(target, anchor)
        if week is None:
            return None

        index = self.phase_index(week)
        return PhaseInfo(
            week_number=week,
            phase_label=self.labels[index],
            progress_percent=self.progress_percent(week),
            total_weeks=self.total_weeks,
            phases=list(self.labels),
            phase_boundaries=self.boundaries,
            phase_index=index,
        )


def check_cycle_alignment(total_weeks: int, cycle_weeks: int) -> bool:
    """
    Report whether the phase plan spans a whole number of schedule cycles.

    The two lengths are not reconciled; a mismatch is logged so it can be
    raised with whoever owns the program content.
    """
    aligned = cycle_weeks > 0 and total_weeks % cycle_weeks == 0
    if not aligned:
        logger.warning(
            "Phase plan length (%d weeks) is not a multiple of the schedule "
            "cycle (%d weeks); phase labels and repeating weeks will drift",
            total_weeks,
            cycle_weeks,
        )
    return aligned
