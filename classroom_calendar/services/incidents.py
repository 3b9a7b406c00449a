"""Incident service: plan, commit and follow up on operator actions."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping

from sqlalchemy.orm import sessionmaker

from ..config import DEFAULT_REGISTERED_BY, SEARCH_HORIZON_DAYS
from .cascade import (
    INCIDENT_REPLACEMENT,
    INCIDENT_RESCHEDULE,
    CascadePlan,
    plan_replacement,
    plan_reschedule,
)
from .committer import commit_plan
from .errors import InstructorNotFound
from .holidays import HolidayCalendar
from .local_time import LocalCalendar
from .recurrence import RECURRENCE_TABLE
from .repository import ClassroomSnapshot, SessionSnapshot, get_instructor, load_classroom, load_sessions
from .span import recompute_span

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IncidentOutcome:
    incident_id: int
    kind: str
    updated_session_ids: tuple[int, ...]
    end_date: date | None = None
    warnings: tuple[str, ...] = ()


class IncidentService:
    """Entry point for replacement and reschedule actions on a classroom.

    Every call reads a fresh snapshot of the classroom and its sessions, so
    no state is carried between requests.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        holidays: HolidayCalendar,
        local_calendar: LocalCalendar | None = None,
        recurrence: Mapping[str, frozenset[int]] = RECURRENCE_TABLE,
        registered_by: str = DEFAULT_REGISTERED_BY,
        horizon_days: int = SEARCH_HORIZON_DAYS,
    ) -> None:
        self.session_factory = session_factory
        self.holidays = holidays
        self.local_calendar = local_calendar or LocalCalendar()
        self.recurrence = recurrence
        self.registered_by = registered_by
        self.horizon_days = horizon_days

    def _read(self, classroom_id: int) -> tuple[ClassroomSnapshot, tuple[SessionSnapshot, ...]]:
        with self.session_factory() as session:
            classroom = load_classroom(session, classroom_id)
            sessions = load_sessions(session, classroom_id)
        return classroom, sessions

    def preview_reschedule(
        self,
        classroom_id: int,
        session_id: int,
        new_anchor_date: date | str,
        reason: str,
    ) -> CascadePlan:
        classroom, sessions = self._read(classroom_id)
        return plan_reschedule(
            classroom,
            sessions,
            session_id,
            new_anchor_date,
            reason,
            holidays=self.holidays,
            local_calendar=self.local_calendar,
            recurrence=self.recurrence,
            horizon_days=self.horizon_days,
        )

    def plan_and_commit_reschedule(
        self,
        classroom_id: int,
        session_id: int,
        new_anchor_date: date | str,
        reason: str,
        *,
        registered_by: str | None = None,
    ) -> IncidentOutcome:
        plan = self.preview_reschedule(classroom_id, session_id, new_anchor_date, reason)
        LOGGER.info(
            "Rescheduling session %s of classroom %s to %s (%d later session(s))",
            plan.target.sequence,
            plan.incident.classroom_code,
            plan.target.scheduled_date,
            len(plan.subsequent),
        )
        incident_id = commit_plan(self.session_factory, plan, registered_by or self.registered_by)

        span = recompute_span(self.session_factory, classroom_id)
        return IncidentOutcome(
            incident_id=incident_id,
            kind=INCIDENT_RESCHEDULE,
            updated_session_ids=tuple(change.session_id for change in plan.changes),
            end_date=span.end_date,
            warnings=() if span.ok else (span.warning,),
        )

    def plan_and_commit_replacement(
        self,
        classroom_id: int,
        session_id: int,
        substitute_instructor_id: int,
        reason: str,
        *,
        registered_by: str | None = None,
    ) -> IncidentOutcome:
        with self.session_factory() as session:
            classroom = load_classroom(session, classroom_id)
            sessions = load_sessions(session, classroom_id)
            if (
                substitute_instructor_id is not None
                and get_instructor(session, substitute_instructor_id) is None
            ):
                raise InstructorNotFound(f"Instructor {substitute_instructor_id} not found")

        plan = plan_replacement(classroom, sessions, session_id, substitute_instructor_id, reason)
        incident_id = commit_plan(self.session_factory, plan, registered_by or self.registered_by)
        return IncidentOutcome(
            incident_id=incident_id,
            kind=INCIDENT_REPLACEMENT,
            updated_session_ids=(plan.target.session_id,),
        )


__all__ = ["IncidentOutcome", "IncidentService"]
