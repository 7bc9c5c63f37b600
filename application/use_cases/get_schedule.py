"""
Get Schedule Use Case.

Read-only views over the schedule joined with the ledger: a single day, a
Monday-first week and a calendar month, each with phase framing.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from application.use_cases.training_store import TrainingStore
from backend.core.calendar_utils import DateLike, month_dates, to_day, week_dates
from backend.core.phase_classifier import PhaseClassifier
from domain.models import DayStatus, PhaseInfo, SessionRecord, WorkoutTemplate


@dataclass
class DayOverview:
    """Schedule and status of one calendar day."""
    date: date
    workouts: List[WorkoutTemplate] = field(default_factory=list)
    is_rest_day: bool = True
    status: DayStatus = DayStatus.REST
    is_today: bool = False
    week_focus: Optional[str] = None
    records: List[SessionRecord] = field(default_factory=list)
    phase: Optional[PhaseInfo] = None


@dataclass
class WeekOverview:
    """Seven days, Monday first."""
    start: date
    end: date
    days: List[DayOverview] = field(default_factory=list)
    phase: Optional[PhaseInfo] = None


@dataclass
class MonthOverview:
    """Every day of a month plus counters for the calendar header."""
    month: date
    days: List[DayOverview] = field(default_factory=list)
    scheduled_days: int = 0
    rest_days: int = 0
    completed_days: int = 0
    skipped_days: int = 0


class GetScheduleUseCase:
    """
    Use case for calendar and day views.

    Usage:
        >>> use_case = GetScheduleUseCase(store=store, phase_classifier=PhaseClassifier(16))
        >>> day = use_case.day(date(2025, 1, 6))
        >>> [w.id for w in day.workouts]
        ['push-day']
    """

    def __init__(self, store: TrainingStore, phase_classifier: PhaseClassifier):
        """
        Initialize with required dependencies.

        Args:
            store: Aggregate store (schedule + ledger)
            phase_classifier: Phase framing for displayed dates
        """
        self._store = store
        self._phase_classifier = phase_classifier

    def phase(self, target: DateLike) -> Optional[PhaseInfo]:
        """Phase framing relative to the active program's anchor; None outside the plan."""
        return self._phase_classifier.classify(target, self._store.program.start_date)

    def day(self, target: DateLike, *, include_phase: bool = True) -> DayOverview:
        """
        Get the schedule and status of one day.

        Args:
            target: Date to describe
            include_phase: Attach phase framing

        Returns:
            DayOverview
        """
        day = to_day(target)
        workouts = self._store.workouts_for_date(day)
        slot = self._store.resolver.slot_for(day)
        return DayOverview(
            date=day,
            workouts=workouts,
            is_rest_day=not workouts,
            status=self._store.status_for_date(day),
            is_today=day == self._store.today(),
            week_focus=slot.week_focus if slot else None,
            records=self._store.records_for_date(day),
            phase=self.phase(day) if include_phase else None,
        )

    def week_overview(self, target: DateLike) -> WeekOverview:
        """Monday-to-Sunday overview of the week containing ``target``."""
        dates = week_dates(target)
        return WeekOverview(
            start=dates[0],
            end=dates[-1],
            days=[self.day(d, include_phase=False) for d in dates],
            phase=self.phase(dates[0]),
        )

    def month_overview(self, target: DateLike) -> MonthOverview:
        """Overview of the calendar month containing ``target``."""
        days = [self.day(d, include_phase=False) for d in month_dates(target)]
        return MonthOverview(
            month=days[0].date,
            days=days,
            scheduled_days=sum(1 for d in days if not d.is_rest_day),
            rest_days=sum(1 for d in days if d.is_rest_day),
            completed_days=sum(1 for d in days if d.status == DayStatus.COMPLETED),
            skipped_days=sum(1 for d in days if d.status == DayStatus.SKIPPED),
        )
