"""Repository helpers returning request-scoped snapshots of calendar data."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from classroom_calendar.db.models import ClassSession, Classroom, Incident, Instructor

from .errors import ClassroomNotFound

SESSION_SCHEDULED = "scheduled"
SESSION_RESCHEDULED = "rescheduled"
SESSION_REPLACED = "replaced"
MANAGEABLE_SESSION_STATES: tuple[str, ...] = (SESSION_SCHEDULED, SESSION_RESCHEDULED)

CLASSROOM_UPCOMING = "upcoming"
CLASSROOM_IN_PROGRESS = "in_progress"
ACTIVE_CLASSROOM_STATES: tuple[str, ...] = (CLASSROOM_IN_PROGRESS, CLASSROOM_UPCOMING)


@dataclass(frozen=True, slots=True)
class ClassroomSnapshot:
    id: int
    code: str
    frequency: str
    start_time: str | None
    end_time: str | None
    state: str
    end_date: date | None = None

    @classmethod
    def from_model(cls, classroom: Classroom) -> "ClassroomSnapshot":
        return cls(
            id=classroom.id,
            code=classroom.code,
            frequency=classroom.frequency,
            start_time=classroom.start_time,
            end_time=classroom.end_time,
            state=classroom.state,
            end_date=classroom.end_date,
        )


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    id: int
    classroom_id: int
    sequence: int
    scheduled_date: date
    starts_at: datetime | None
    ends_at: datetime | None
    state: str
    instructor_id: int | None
    version: int

    @classmethod
    def from_model(cls, record: ClassSession) -> "SessionSnapshot":
        return cls(
            id=record.id,
            classroom_id=record.classroom_id,
            sequence=record.sequence,
            scheduled_date=record.scheduled_date,
            starts_at=record.starts_at,
            ends_at=record.ends_at,
            state=record.state,
            instructor_id=record.instructor_id,
            version=record.version,
        )


@dataclass(slots=True)
class SessionData:
    """Input for creating a session at classroom setup time."""

    sequence: int
    scheduled_date: date
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    instructor_id: int | None = None
    state: str = SESSION_SCHEDULED


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def load_classroom(session: Session, classroom_id: int) -> ClassroomSnapshot:
    classroom = session.get(Classroom, classroom_id)
    if classroom is None:
        raise ClassroomNotFound(f"Classroom {classroom_id} not found")
    return ClassroomSnapshot.from_model(classroom)


def list_active_classrooms(session: Session) -> list[ClassroomSnapshot]:
    stmt = (
        select(Classroom)
        .where(Classroom.state.in_(ACTIVE_CLASSROOM_STATES))
        .order_by(Classroom.code)
    )
    return [ClassroomSnapshot.from_model(row) for row in session.scalars(stmt)]


def load_sessions(session: Session, classroom_id: int) -> tuple[SessionSnapshot, ...]:
    """Return every session of the classroom ordered by sequence number."""

    stmt = (
        select(ClassSession)
        .where(ClassSession.classroom_id == classroom_id)
        .order_by(ClassSession.sequence)
    )
    return tuple(SessionSnapshot.from_model(row) for row in session.scalars(stmt))


def list_manageable_sessions(
    session: Session, classroom_id: int, now: datetime
) -> list[SessionSnapshot]:
    """Sessions an operator may still act on.

    Only scheduled or rescheduled sessions that have not ended yet qualify.
    Legacy rows without an end instant are always included.
    """

    load_classroom(session, classroom_id)
    stmt = (
        select(ClassSession)
        .where(
            ClassSession.classroom_id == classroom_id,
            ClassSession.state.in_(MANAGEABLE_SESSION_STATES),
        )
        .order_by(ClassSession.sequence)
    )
    snapshots = [SessionSnapshot.from_model(row) for row in session.scalars(stmt)]
    return [item for item in snapshots if item.ends_at is None or item.ends_at > now]


def get_instructor(session: Session, instructor_id: int) -> Instructor | None:
    return session.get(Instructor, instructor_id)


def list_instructors(session: Session) -> Sequence[Instructor]:
    return session.scalars(select(Instructor).order_by(Instructor.full_name)).all()


def list_incidents(session: Session, classroom_id: int | None = None) -> Sequence[Incident]:
    stmt = select(Incident)
    if classroom_id is not None:
        stmt = stmt.where(Incident.classroom_id == classroom_id)
    return session.scalars(stmt.order_by(Incident.id.desc())).all()


def latest_incident_for_session(
    session: Session, classroom_id: int, sequence: int
) -> Incident | None:
    stmt = (
        select(Incident)
        .where(Incident.classroom_id == classroom_id, Incident.session_sequence == sequence)
        .order_by(Incident.id.desc())
        .limit(1)
    )
    return session.scalar(stmt)


# ---------------------------------------------------------------------------
# Classroom setup
# ---------------------------------------------------------------------------


def create_instructor(session: Session, full_name: str, email: str) -> Instructor:
    instructor = Instructor(full_name=full_name, email=email)
    session.add(instructor)
    session.flush()
    return instructor


def create_classroom(
    session: Session,
    code: str,
    frequency: str,
    start_time: str | None,
    end_time: str | None,
    state: str = CLASSROOM_UPCOMING,
) -> Classroom:
    classroom = Classroom(
        code=code,
        frequency=frequency,
        start_time=start_time,
        end_time=end_time,
        state=state,
    )
    session.add(classroom)
    session.flush()
    return classroom


def add_sessions(
    session: Session, classroom: Classroom, sessions: Iterable[SessionData]
) -> list[ClassSession]:
    created: list[ClassSession] = []
    for data in sessions:
        record = ClassSession(
            sequence=data.sequence,
            scheduled_date=data.scheduled_date,
            starts_at=data.starts_at,
            ends_at=data.ends_at,
            state=data.state,
            instructor_id=data.instructor_id,
        )
        classroom.sessions.append(record)
        created.append(record)
    session.flush()
    if created:
        classroom.end_date = max(record.scheduled_date for record in classroom.sessions)
        session.flush()
    return created


__all__ = [
    "ACTIVE_CLASSROOM_STATES",
    "CLASSROOM_IN_PROGRESS",
    "CLASSROOM_UPCOMING",
    "ClassroomSnapshot",
    "MANAGEABLE_SESSION_STATES",
    "SESSION_REPLACED",
    "SESSION_RESCHEDULED",
    "SESSION_SCHEDULED",
    "SessionData",
    "SessionSnapshot",
    "add_sessions",
    "create_classroom",
    "create_instructor",
    "get_instructor",
    "latest_incident_for_session",
    "list_active_classrooms",
    "list_incidents",
    "list_instructors",
    "list_manageable_sessions",
    "load_classroom",
    "load_sessions",
]
