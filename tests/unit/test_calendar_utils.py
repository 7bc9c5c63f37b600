"""Unit tests for day-granularity date helpers."""
from datetime import date, datetime, timezone

import pytest

from backend.core.calendar_utils import (
    add_days,
    days_between,
    elapsed_days,
    end_of_week,
    first_of_month,
    is_same_day,
    month_dates,
    start_of_week,
    to_day,
    week_dates,
)


@pytest.mark.unit
class TestDayNormalization:
    def test_datetime_drops_time_of_day(self):
        assert to_day(datetime(2025, 1, 6, 23, 59)) == date(2025, 1, 6)

    def test_date_passes_through(self):
        assert to_day(date(2025, 1, 6)) == date(2025, 1, 6)

    def test_aware_datetime_uses_local_day(self, eastern_time):
        late_evening = datetime(2025, 1, 7, 2, 0, tzinfo=timezone.utc)
        assert to_day(late_evening) == date(2025, 1, 6)
        assert is_same_day(late_evening, datetime(2025, 1, 6, 8, 0))

    def test_same_day_ignores_time(self):
        assert is_same_day(datetime(2025, 1, 6, 0, 1), datetime(2025, 1, 6, 23, 59))
        assert not is_same_day(datetime(2025, 1, 6, 23, 59), datetime(2025, 1, 7, 0, 1))

    def test_none_never_matches(self):
        assert not is_same_day(None, date(2025, 1, 6))
        assert not is_same_day(None, None)


@pytest.mark.unit
class TestDayArithmetic:
    def test_elapsed_days_is_signed(self):
        assert elapsed_days(date(2025, 1, 6), date(2025, 1, 13)) == 7
        assert elapsed_days(date(2025, 1, 6), date(2025, 1, 5)) == -1

    def test_elapsed_days_crosses_month_and_year(self):
        assert elapsed_days(date(2024, 12, 30), date(2025, 1, 2)) == 3

    def test_late_evening_counts_as_same_day(self):
        assert elapsed_days(datetime(2025, 1, 6, 23, 0), datetime(2025, 1, 7, 1, 0)) == 1

    def test_days_between_is_absolute(self):
        assert days_between(date(2025, 1, 13), date(2025, 1, 6)) == 7

    def test_add_days(self):
        assert add_days(date(2025, 1, 31), 1) == date(2025, 2, 1)
        assert add_days(datetime(2025, 1, 1, 12), -1) == date(2024, 12, 31)


@pytest.mark.unit
class TestCalendarRanges:
    def test_week_is_monday_first(self):
        # 2025-01-15 is a Wednesday
        assert start_of_week(date(2025, 1, 15)) == date(2025, 1, 13)
        assert end_of_week(date(2025, 1, 15)) == date(2025, 1, 19)

    def test_sunday_belongs_to_previous_monday(self):
        assert start_of_week(date(2025, 1, 19)) == date(2025, 1, 13)

    def test_week_dates(self):
        dates = week_dates(date(2025, 1, 1))
        assert len(dates) == 7
        assert dates[0] == date(2024, 12, 30)
        assert dates[-1] == date(2025, 1, 5)

    def test_month_dates_handles_leap_year(self):
        assert len(month_dates(date(2024, 2, 10))) == 29
        assert len(month_dates(date(2025, 2, 10))) == 28

    def test_first_of_month(self):
        assert first_of_month(datetime(2025, 3, 31, 8)) == date(2025, 3, 1)
