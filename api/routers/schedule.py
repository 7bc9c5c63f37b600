"""
Schedule router.

This router provides:
- Workouts planned for a date (with today's secondary session)
- Day status joined from the ledger
- Week and month calendar overviews
"""

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_schedule_use_case, get_training_store
from application.use_cases import (
    DayOverview,
    GetScheduleUseCase,
    MonthOverview,
    TrainingStore,
    WeekOverview,
)
from domain.models import DayStatus, PhaseInfo, SessionRecord, WorkoutTemplate

router = APIRouter(
    prefix="/schedule",
    tags=["Schedule"],
)


# =============================================================================
# Response Models
# =============================================================================


class DayResponse(BaseModel):
    """Schedule and status of one day."""
    date: dt.date
    workouts: List[WorkoutTemplate]
    is_rest_day: bool
    status: DayStatus
    is_today: bool = False
    week_focus: Optional[str] = None
    records: List[SessionRecord] = []
    phase: Optional[PhaseInfo] = None

    @classmethod
    def from_overview(cls, day: DayOverview) -> "DayResponse":
        return cls(
            date=day.date,
            workouts=day.workouts,
            is_rest_day=day.is_rest_day,
            status=day.status,
            is_today=day.is_today,
            week_focus=day.week_focus,
            records=day.records,
            phase=day.phase,
        )


class WorkoutResponse(BaseModel):
    """First planned workout of a day; null on rest days."""
    date: dt.date
    workout: Optional[WorkoutTemplate] = None
    is_rest_day: bool


class WeekResponse(BaseModel):
    start: dt.date
    end: dt.date
    days: List[DayResponse]
    phase: Optional[PhaseInfo] = None

    @classmethod
    def from_overview(cls, week: WeekOverview) -> "WeekResponse":
        return cls(
            start=week.start,
            end=week.end,
            days=[DayResponse.from_overview(d) for d in week.days],
            phase=week.phase,
        )


class MonthResponse(BaseModel):
    month: dt.date
    days: List[DayResponse]
    scheduled_days: int
    rest_days: int
    completed_days: int
    skipped_days: int

    @classmethod
    def from_overview(cls, month: MonthOverview) -> "MonthResponse":
        return cls(
            month=month.month,
            days=[DayResponse.from_overview(d) for d in month.days],
            scheduled_days=month.scheduled_days,
            rest_days=month.rest_days,
            completed_days=month.completed_days,
            skipped_days=month.skipped_days,
        )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/week/{date}", response_model=WeekResponse)
def get_week(
    date: dt.date,
    use_case: GetScheduleUseCase = Depends(get_schedule_use_case),
) -> WeekResponse:
    """Monday-to-Sunday overview of the week containing ``date``."""
    return WeekResponse.from_overview(use_case.week_overview(date))


@router.get("/month/{date}", response_model=MonthResponse)
def get_month(
    date: dt.date,
    use_case: GetScheduleUseCase = Depends(get_schedule_use_case),
) -> MonthResponse:
    """Overview of the calendar month containing ``date``."""
    return MonthResponse.from_overview(use_case.month_overview(date))


@router.get("/{date}", response_model=DayResponse)
def get_day(
    date: dt.date,
    use_case: GetScheduleUseCase = Depends(get_schedule_use_case),
) -> DayResponse:
    """
    Workouts, status and phase for one day.

    Dates before the program start are rest days with no phase.
    """
    return DayResponse.from_overview(use_case.day(date))


@router.get("/{date}/workout", response_model=WorkoutResponse)
def get_day_workout(
    date: dt.date,
    store: TrainingStore = Depends(get_training_store),
) -> WorkoutResponse:
    """First planned workout for a day, or null on a rest day."""
    workout = store.workout_for_date(date)
    return WorkoutResponse(date=date, workout=workout, is_rest_day=workout is None)
