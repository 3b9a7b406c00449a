"""Exception hierarchy shared by the rescheduling services."""
from __future__ import annotations

from datetime import date


class SchedulingError(RuntimeError):
    """Base class for every failure raised by the calendar services."""


class PlanningError(SchedulingError):
    """Raised before any storage write; nothing has been mutated."""


class ConfigurationError(PlanningError):
    """The classroom is misconfigured (frequency or time-of-day fields)."""


class InvalidAnchorDate(PlanningError):
    """The operator supplied a new date that is not a calendar date."""


class IncidentValidationError(PlanningError):
    """Required operator input is missing."""


class ClassroomNotFound(PlanningError):
    pass


class SessionNotFound(PlanningError):
    pass


class InstructorNotFound(PlanningError):
    pass


class SearchExhausted(PlanningError):
    """No allowed, non-holiday date exists within the search horizon."""

    def __init__(self, from_date: date, horizon_days: int) -> None:
        self.from_date = from_date
        self.horizon_days = horizon_days
        super().__init__(
            f"No valid date found within {horizon_days} days after {from_date.isoformat()}; "
            "check the classroom frequency against the holiday calendar"
        )


class CommitAborted(SchedulingError):
    """The storage transaction was rejected; no part of the plan was applied."""


class ConcurrentModification(CommitAborted):
    """A planned session changed between planning and commit."""


def storage_message(exc: Exception) -> str:
    """Short, user-facing text for a storage error, without SQL or parameters."""

    cause = getattr(exc, "orig", None) or exc
    lines = str(cause).splitlines()
    if not lines:
        return type(cause).__name__
    return f"{type(cause).__name__}: {lines[0]}"


__all__ = [
    "ClassroomNotFound",
    "CommitAborted",
    "ConcurrentModification",
    "ConfigurationError",
    "IncidentValidationError",
    "InstructorNotFound",
    "InvalidAnchorDate",
    "PlanningError",
    "SchedulingError",
    "SearchExhausted",
    "SessionNotFound",
    "storage_message",
]
