"""Cascade planner: recompute a classroom's session dates after a reschedule.

Planning is a pure function of its inputs. Nothing here touches storage; the
resulting plan is handed to :func:`classroom_calendar.services.committer.commit_plan`.

Rescheduling moves the target session to the operator's anchor date as given
(holidays and weekdays are not checked for the anchor) and then walks every
later session in sequence order, placing each one on the next allowed,
non-holiday weekday after the previous session's new date. Each step reads
the previous step's result, which keeps the dates strictly increasing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Sequence

from ..config import SEARCH_HORIZON_DAYS
from .calendar_resolver import next_valid_date
from .errors import (
    ConfigurationError,
    IncidentValidationError,
    InvalidAnchorDate,
    SessionNotFound,
)
from .holidays import HolidayCalendar
from .local_time import LocalCalendar
from .recurrence import RECURRENCE_TABLE, weekdays_for
from .repository import (
    SESSION_REPLACED,
    SESSION_RESCHEDULED,
    ClassroomSnapshot,
    SessionSnapshot,
)

INCIDENT_REPLACEMENT = "replacement"
INCIDENT_RESCHEDULE = "reschedule"

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionChange:
    """New field values for one session; ``None`` leaves a field untouched."""

    session_id: int
    sequence: int
    expected_version: int
    scheduled_date: date | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    state: str | None = None
    instructor_id: int | None = None


@dataclass(frozen=True, slots=True)
class IncidentEntry:
    classroom_id: int
    classroom_code: str
    session_sequence: int
    original_date: date
    kind: str
    reason: str
    new_date: date | None = None
    substitute_instructor_id: int | None = None


@dataclass(frozen=True, slots=True)
class CascadePlan:
    classroom_id: int
    target: SessionChange
    subsequent: tuple[SessionChange, ...]
    incident: IncidentEntry

    @property
    def changes(self) -> tuple[SessionChange, ...]:
        return (self.target, *self.subsequent)


@dataclass(frozen=True, slots=True)
class ReplacementPlan:
    classroom_id: int
    target: SessionChange
    incident: IncidentEntry

    @property
    def changes(self) -> tuple[SessionChange, ...]:
        return (self.target,)


def parse_anchor_date(value: date | str | None) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidAnchorDate(f"The new date {value!r} is not valid") from exc
    raise InvalidAnchorDate(f"The new date {value!r} is not valid")


def _require_reason(reason: str | None) -> str:
    if reason is None or not reason.strip():
        raise IncidentValidationError("A reason is required for every incident")
    return reason.strip()


def _ordered(sessions: Sequence[SessionSnapshot]) -> list[SessionSnapshot]:
    return sorted(sessions, key=lambda item: item.sequence)


def _locate(sessions: Sequence[SessionSnapshot], session_id: int) -> int:
    for index, item in enumerate(sessions):
        if item.id == session_id:
            return index
    raise SessionNotFound(f"Session {session_id} not found in classroom")


def plan_reschedule(
    classroom: ClassroomSnapshot,
    sessions: Sequence[SessionSnapshot],
    session_id: int,
    anchor_date: date | str,
    reason: str,
    *,
    holidays: HolidayCalendar,
    local_calendar: LocalCalendar,
    recurrence: Mapping[str, frozenset[int]] = RECURRENCE_TABLE,
    horizon_days: int = SEARCH_HORIZON_DAYS,
) -> CascadePlan:
    """Build the reschedule plan for ``session_id`` moved to ``anchor_date``."""

    weekdays = weekdays_for(classroom.frequency, recurrence)
    start_time = local_calendar.parse_time_of_day(classroom.start_time, "start time")
    end_time = local_calendar.parse_time_of_day(classroom.end_time, "end time")
    if end_time <= start_time:
        raise ConfigurationError(
            f"Classroom {classroom.code} end time must be later than its start time"
        )
    anchor = parse_anchor_date(anchor_date)
    ordered = _ordered(sessions)
    index = _locate(ordered, session_id)
    reason = _require_reason(reason)

    original = ordered[index]
    target = SessionChange(
        session_id=original.id,
        sequence=original.sequence,
        expected_version=original.version,
        scheduled_date=anchor,
        starts_at=local_calendar.compose(anchor, start_time),
        ends_at=local_calendar.compose(anchor, end_time),
        state=SESSION_RESCHEDULED,
    )

    cursor = anchor
    subsequent: list[SessionChange] = []
    for later in ordered[index + 1 :]:
        cursor = next_valid_date(cursor, weekdays, holidays, horizon_days=horizon_days)
        subsequent.append(
            SessionChange(
                session_id=later.id,
                sequence=later.sequence,
                expected_version=later.version,
                scheduled_date=cursor,
                starts_at=local_calendar.compose(cursor, start_time),
                ends_at=local_calendar.compose(cursor, end_time),
            )
        )
    if not holidays.covers(cursor):
        LOGGER.warning(
            "Classroom %s now runs until %s, past the last known holiday %s; "
            "set HOLIDAYS_PATH to a calendar covering those dates",
            classroom.code,
            cursor.isoformat(),
            holidays.last_known.isoformat(),
        )

    incident = IncidentEntry(
        classroom_id=classroom.id,
        classroom_code=classroom.code,
        session_sequence=original.sequence,
        original_date=original.scheduled_date,
        kind=INCIDENT_RESCHEDULE,
        reason=reason,
        new_date=anchor,
    )
    return CascadePlan(
        classroom_id=classroom.id,
        target=target,
        subsequent=tuple(subsequent),
        incident=incident,
    )


def plan_replacement(
    classroom: ClassroomSnapshot,
    sessions: Sequence[SessionSnapshot],
    session_id: int,
    substitute_instructor_id: int | None,
    reason: str,
) -> ReplacementPlan:
    """Assign a substitute instructor to one session; dates stay as they are."""

    if substitute_instructor_id is None:
        raise IncidentValidationError("A substitute instructor must be selected")
    ordered = _ordered(sessions)
    original = ordered[_locate(ordered, session_id)]
    reason = _require_reason(reason)

    target = SessionChange(
        session_id=original.id,
        sequence=original.sequence,
        expected_version=original.version,
        state=SESSION_REPLACED,
        instructor_id=substitute_instructor_id,
    )
    incident = IncidentEntry(
        classroom_id=classroom.id,
        classroom_code=classroom.code,
        session_sequence=original.sequence,
        original_date=original.scheduled_date,
        kind=INCIDENT_REPLACEMENT,
        reason=reason,
        substitute_instructor_id=substitute_instructor_id,
    )
    return ReplacementPlan(classroom_id=classroom.id, target=target, incident=incident)


__all__ = [
    "CascadePlan",
    "INCIDENT_REPLACEMENT",
    "INCIDENT_RESCHEDULE",
    "IncidentEntry",
    "ReplacementPlan",
    "SessionChange",
    "parse_anchor_date",
    "plan_replacement",
    "plan_reschedule",
]
