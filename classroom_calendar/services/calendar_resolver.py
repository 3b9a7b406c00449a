"""Resolve the next valid meeting date under a weekly pattern."""
from __future__ import annotations

from datetime import date, timedelta
from typing import AbstractSet

from ..config import SEARCH_HORIZON_DAYS
from .errors import SearchExhausted
from .holidays import HolidayCalendar


def next_valid_date(
    from_date: date,
    weekdays: AbstractSet[int],
    holidays: HolidayCalendar,
    *,
    horizon_days: int = SEARCH_HORIZON_DAYS,
) -> date:
    """Return the first day after ``from_date`` on an allowed, non-holiday weekday.

    Days ``from_date + 1`` through ``from_date + horizon_days`` are searched;
    :class:`SearchExhausted` is raised when none qualifies.
    """

    for offset in range(1, horizon_days + 1):
        candidate = from_date + timedelta(days=offset)
        if candidate.weekday() in weekdays and not holidays.is_holiday(candidate):
            return candidate
    raise SearchExhausted(from_date, horizon_days)


__all__ = ["next_valid_date"]
