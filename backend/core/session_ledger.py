"""
Session ledger operations.

The ledger is a list of SessionRecord ordered most-recent-first. Ordering is
derived on every read from the explicit key ``(day, sequence)`` rather than
from insertion position, so records appended out of chronological order
still sort correctly. All operations are pure: they return a new list and
never mutate their input. Queries are linear scans.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from backend.core.calendar_utils import DateLike, to_day
from domain.models import DayStatus, ReflectionData, SessionRecord

logger = logging.getLogger(__name__)


class MergeOutcome(str, Enum):
    """Result of attaching reflection data to the ledger."""

    UPDATED = "updated"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class MergeResult:
    """Outcome of merge_reflection plus the resulting ledger."""

    outcome: MergeOutcome
    ledger: List[SessionRecord]
    record: Optional[SessionRecord] = None
    candidates: int = 0

    @property
    def updated(self) -> bool:
        return self.outcome == MergeOutcome.UPDATED


def _sort_key(record: SessionRecord):
    return (record.day, record.sequence)


def order_records(records: Iterable[SessionRecord]) -> List[SessionRecord]:
    """
    Sort records most-recent-first by (day, sequence).

    The sort is stable, so records sharing a key keep their relative order.
    """
    return sorted(records, key=_sort_key, reverse=True)


def next_sequence(ledger: Iterable[SessionRecord]) -> int:
    return max((r.sequence for r in ledger), default=0) + 1


def append(ledger: List[SessionRecord], record: SessionRecord) -> List[SessionRecord]:
    """
    Add a record and return the re-ordered ledger.

    The record is stamped with the next sequence number so it sorts ahead of
    every earlier record of the same day.
    """
    stamped = record.model_copy(update={"sequence": next_sequence(ledger)})
    return order_records([stamped, *ledger])


def records_for_date(ledger: Iterable[SessionRecord], day: DateLike) -> List[SessionRecord]:
    """All records of a calendar day, most recent first."""
    target = to_day(day)
    return [r for r in order_records(ledger) if r.day == target]


def entry_for_date(ledger: Iterable[SessionRecord], day: DateLike) -> Optional[SessionRecord]:
    """Most recent record of a calendar day, or None."""
    matches = records_for_date(ledger, day)
    return matches[0] if matches else None


def day_status(ledger: Iterable[SessionRecord], day: DateLike, scheduled: bool) -> DayStatus:
    """
    Status of a calendar day.

    A ledger entry wins; without one the day is pending when a workout was
    scheduled and rest otherwise.
    """
    entry = entry_for_date(ledger, day)
    if entry is not None:
        return DayStatus(entry.status.value)
    return DayStatus.PENDING if scheduled else DayStatus.REST


def merge_reflection(
    ledger: List[SessionRecord],
    day: DateLike,
    reflection: ReflectionData,
    workout_hint: Optional[str] = None,
    *,
    record_id: Optional[str] = None,
    strict: bool = False,
) -> MergeResult:
    """
    Attach reflection data to the most relevant record of a day.

    Target selection, in order:
    1. ``record_id`` when given (must be a record of that day)
    2. the first record of the day whose snapshotted workout id equals
       ``workout_hint``
    3. the first record of the day in ledger order

    At most one record is updated. The reflection replaces any earlier one on
    that record. With ``strict`` set, step 3 is refused when the day holds
    more than one record, since guessing can pick the wrong session.

    Args:
        ledger: Current records
        day: Day the reflection belongs to
        reflection: Data to attach
        workout_hint: Workout id of the intended session
        record_id: Exact record to update
        strict: Reject guesses between several same-day records

    Returns:
        MergeResult with the new ledger (unchanged unless UPDATED).
    """
    ordered = order_records(ledger)
    candidates = [r for r in ordered if r.day == to_day(day)]

    if not candidates:
        return MergeResult(MergeOutcome.NOT_FOUND, ordered)

    target: Optional[SessionRecord] = None
    if record_id is not None:
        target = next((r for r in candidates if r.id == record_id), None)
        if target is None:
            return MergeResult(MergeOutcome.NOT_FOUND, ordered, candidates=len(candidates))
    elif workout_hint is not None:
        target = next((r for r in candidates if r.workout_id == workout_hint), None)

    if target is None:
        if strict and len(candidates) > 1:
            logger.info(
                "Refusing ambiguous reflection merge: %d records on %s",
                len(candidates),
                to_day(day).isoformat(),
            )
            return MergeResult(MergeOutcome.AMBIGUOUS, ordered, candidates=len(candidates))
        target = candidates[0]

    updated = target.with_reflection(reflection)
    new_ledger = [updated if r is target else r for r in ordered]
    return MergeResult(
        MergeOutcome.UPDATED, new_ledger, record=updated, candidates=len(candidates)
    )


def remove_for_date(ledger: Iterable[SessionRecord], day: DateLike) -> List[SessionRecord]:
    """Drop every record of a calendar day ("undo today")."""
    target = to_day(day)
    return [r for r in order_records(ledger) if r.day != target]
