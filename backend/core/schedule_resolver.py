"""
Schedule resolver.

Maps any calendar date to the workout template(s) planned for it under a
repeating multi-week program:

    elapsed  = days from the program anchor to the target (day granularity)
    week     = (elapsed // 7) mod L
    weekday  = elapsed mod 7            (slot 0 is the anchor's day, Monday
                                         by convention)

Dates before the anchor resolve to no workout. A date L*7 days after the
anchor maps back to the anchor's slot, so the program repeats indefinitely.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from backend.core.calendar_utils import DateLike, elapsed_days, is_same_day, to_day
from domain.models import DAYS_PER_WEEK, Program, WorkoutTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSlot:
    """Position of a date within the program cycle."""

    elapsed_days: int
    week_index: int  # 0-based index into Program.weeks
    weekday_index: int  # 0 = Monday slot
    week_focus: str
    template_id: Optional[str]

    @property
    def week_number(self) -> int:
        """1-based week number within the cycle."""
        return self.week_index + 1

    @property
    def is_rest(self) -> bool:
        return self.template_id is None


class ScheduleResolver:
    """
    Deterministic, side-effect free date -> workout lookup.

    Results are memoized per cycle position since resolution is periodic
    with period L*7 days.

    Usage:
        >>> resolver = ScheduleResolver(program)
        >>> resolver.resolve(date(2025, 1, 6))
        [WorkoutTemplate(id='push-day', ...)]
    """

    def __init__(self, program: Program) -> None:
        self._program = program
        self._cache: Dict[int, List[WorkoutTemplate]] = {}

    @property
    def program(self) -> Program:
        return self._program

    @property
    def cycle_days(self) -> int:
        return self._program.cycle_days

    def slot_for(self, target: DateLike, anchor: Optional[DateLike] = None) -> Optional[ResolvedSlot]:
        """
        Locate the slot for a date.

        Args:
            target: Date to resolve
            anchor: Program anchor; defaults to the program's start date

        Returns:
            ResolvedSlot, or None when the program has not started yet.
        """
        start = to_day(anchor) if anchor is not None else self._program.start_date
        elapsed = elapsed_days(start, target)
        if elapsed < 0:
            return None

        week_index = (elapsed // DAYS_PER_WEEK) % self._program.cycle_weeks
        weekday_index = elapsed % DAYS_PER_WEEK
        week = self._program.weeks[week_index]

        return ResolvedSlot(
            elapsed_days=elapsed,
            week_index=week_index,
            weekday_index=weekday_index,
            week_focus=week.focus,
            template_id=week.slots[weekday_index],
        )

    def resolve(self, target: DateLike, anchor: Optional[DateLike] = None) -> List[WorkoutTemplate]:
        """
        Get the workout templates planned for a date.

        Args:
            target: Date to resolve
            anchor: Program anchor; defaults to the program's start date

        Returns:
            List of templates; empty for rest days and dates before the anchor.
        """
        slot = self.slot_for(target, anchor)
        if slot is None:
            return []

        position = slot.elapsed_days % self.cycle_days
        cached = self._cache.get(position)
        if cached is None:
            cached = self._lookup(slot)
            self._cache[position] = cached
        return list(cached)

    def resolve_one(self, target: DateLike, anchor: Optional[DateLike] = None) -> Optional[WorkoutTemplate]:
        """First planned template for a date, or None on a rest day."""
        workouts = self.resolve(target, anchor)
        return workouts[0] if workouts else None

    def is_rest_day(self, target: DateLike, anchor: Optional[DateLike] = None) -> bool:
        return not self.resolve(target, anchor)

    def resolve_with_secondary(
        self,
        target: DateLike,
        today: DateLike,
        secondary: Optional[WorkoutTemplate],
    ) -> List[WorkoutTemplate]:
        """
        Multi-workout lookup used by the "today" views.

        Only the current day is augmented with the secondary session, and
        only when a main workout is scheduled. Every other date resolves
        exactly like ``resolve``.

        Args:
            target: Date to resolve
            today: Current day according to the clock
            secondary: Additional template for today, or None

        Returns:
            Planned templates, main workout first.
        """
        workouts = self.resolve(target)
        if not workouts or secondary is None or not is_same_day(target, today):
            return workouts
        if any(w.id == secondary.id for w in workouts):
            return workouts
        return workouts + [secondary]

    def _lookup(self, slot: ResolvedSlot) -> List[WorkoutTemplate]:
        if slot.is_rest:
            return []
        template = self._program.template(slot.template_id)
        if template is None:
            # Program validation rejects dangling ids; treat as rest if one slips through
            logger.warning(
                "Slot week=%d day=%d references missing template '%s'",
                slot.week_number,
                slot.weekday_index,
                slot.template_id,
            )
            return []
        return [template]


def resolve(target: DateLike, program: Program, anchor: Optional[date] = None) -> List[WorkoutTemplate]:
    """Functional form of ``ScheduleResolver.resolve`` for one-off lookups."""
    return ScheduleResolver(program).resolve(target, anchor)
