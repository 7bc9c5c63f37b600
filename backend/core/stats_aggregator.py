"""
Streak and stats aggregation.

Pure functions over the ledger. Nothing here is maintained incrementally:
every call re-derives its result from the full record list, so persisted
streak/stats values are only ever a cache.
"""

from datetime import timedelta
from typing import Iterable, Set

from backend.core.calendar_utils import DateLike, first_of_month, to_day
from domain.models import DerivedStats, SessionRecord


def _completed_days(ledger: Iterable[SessionRecord]) -> Set:
    return {r.day for r in ledger if r.is_completed}


def compute_streak(ledger: Iterable[SessionRecord], today: DateLike) -> int:
    """
    Count consecutive days with a completed session, ending at today.

    One day of grace applies: when today has no record yet the walk starts
    at yesterday, so an active streak is not broken before the user trains.
    A skipped record for today (without a completion) ends the streak.
    Any day without a completion stops the walk.

    Args:
        ledger: Session records in any order
        today: Current day according to the clock

    Returns:
        Streak length, >= 0.
    """
    records = list(ledger)
    day = to_day(today)
    completed = _completed_days(records)

    if day not in completed:
        if any(r.is_skipped and r.day == day for r in records):
            return 0
        day -= timedelta(days=1)

    streak = 0
    while day in completed:
        streak += 1
        day -= timedelta(days=1)
    return streak


def compute_stats(ledger: Iterable[SessionRecord], reference_date: DateLike) -> DerivedStats:
    """
    Aggregate counters for the stats view.

    ``this_month_completed`` counts completed records dated on or after the
    first of ``reference_date``'s month. ``completion_rate`` is
    ``round(100 * completed / (completed + skipped))``, 0 for an empty ledger.
    """
    month_start = first_of_month(reference_date)
    completed = 0
    skipped = 0
    this_month = 0

    for record in ledger:
        if record.is_completed:
            completed += 1
            if record.day >= month_start:
                this_month += 1
        elif record.is_skipped:
            skipped += 1

    logged = completed + skipped
    rate = round(100 * completed / logged) if logged else 0

    return DerivedStats(
        total_completed=completed,
        this_month_completed=this_month,
        completion_rate=rate,
    )
