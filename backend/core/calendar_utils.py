"""
Calendar utilities.

Pure date arithmetic at day granularity. Every function accepts either a
``date`` or a ``datetime``; the time-of-day component is discarded.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

DateLike = Union[date, datetime]


def to_day(value: DateLike) -> date:
    """
    Normalize a date or datetime to a calendar day.

    Timezone-aware datetimes (e.g. stored UTC timestamps ending in "Z") are
    converted to local time first. Naive datetimes are taken as local time already.

    Args:
        value: Date or datetime

    Returns:
        The calendar day with time of day removed.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().date()
        return value.date()
    return value


def is_same_day(first: Optional[DateLike], second: Optional[DateLike]) -> bool:
    """Check if two values fall on the same calendar day. None never matches."""
    if first is None or second is None:
        return False
    return to_day(first) == to_day(second)


def start_of_week(value: DateLike) -> date:
    """Monday of the week containing ``value``."""
    day = to_day(value)
    return day - timedelta(days=day.weekday())


def end_of_week(value: DateLike) -> date:
    """Sunday of the week containing ``value``."""
    return start_of_week(value) + timedelta(days=6)


def add_days(value: DateLike, days: int) -> date:
    return to_day(value) + timedelta(days=days)


def elapsed_days(anchor: DateLike, target: DateLike) -> int:
    """
    Signed number of whole days from ``anchor`` to ``target``.

    Negative when ``target`` is before ``anchor``.
    """
    return (to_day(target) - to_day(anchor)).days


def days_between(first: DateLike, second: DateLike) -> int:
    """Absolute number of days between two dates."""
    return abs(elapsed_days(first, second))


def first_of_month(value: DateLike) -> date:
    return to_day(value).replace(day=1)


def week_dates(value: DateLike) -> List[date]:
    """The seven dates (Monday first) of the week containing ``value``."""
    monday = start_of_week(value)
    return [monday + timedelta(days=offset) for offset in range(7)]


def month_dates(value: DateLike) -> List[date]:
    """Every date of the month containing ``value``."""
    first = first_of_month(value)
    _, length = calendar.monthrange(first.year, first.month)
    return [first + timedelta(days=offset) for offset in range(length)]
