"""Convenient re-exports for the calendar service layer."""
from __future__ import annotations

from .calendar_resolver import next_valid_date
from .cascade import (
    CascadePlan,
    IncidentEntry,
    ReplacementPlan,
    SessionChange,
    plan_replacement,
    plan_reschedule,
)
from .committer import commit_plan
from .holidays import HolidayCalendar, load_holiday_calendar
from .incidents import IncidentOutcome, IncidentService
from .local_time import LocalCalendar
from .recurrence import RECURRENCE_TABLE, weekdays_for
from .span import SpanOutcome, recompute_span

__all__ = [
    "CascadePlan",
    "HolidayCalendar",
    "IncidentEntry",
    "IncidentOutcome",
    "IncidentService",
    "LocalCalendar",
    "RECURRENCE_TABLE",
    "ReplacementPlan",
    "SessionChange",
    "SpanOutcome",
    "commit_plan",
    "load_holiday_calendar",
    "next_valid_date",
    "plan_replacement",
    "plan_reschedule",
    "recompute_span",
    "weekdays_for",
]
