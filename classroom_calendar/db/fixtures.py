"""Development fixture helpers."""
from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from classroom_calendar.db.models import Classroom
from classroom_calendar.services.calendar_resolver import next_valid_date
from classroom_calendar.services.holidays import HolidayCalendar
from classroom_calendar.services.local_time import LocalCalendar
from classroom_calendar.services.recurrence import weekdays_for
from classroom_calendar.services.repository import (
    CLASSROOM_IN_PROGRESS,
    SessionData,
    add_sessions,
    create_classroom,
    create_instructor,
    list_instructors,
)


def build_session_series(
    first_date: date,
    count: int,
    frequency: str,
    start_time: str,
    end_time: str,
    *,
    holidays: HolidayCalendar,
    local_calendar: LocalCalendar,
    instructor_id: int | None = None,
) -> list[SessionData]:
    """Lay out ``count`` sessions starting on ``first_date`` under ``frequency``."""

    weekdays = weekdays_for(frequency)
    series: list[SessionData] = []
    current = first_date
    for sequence in range(1, count + 1):
        if sequence > 1:
            current = next_valid_date(current, weekdays, holidays)
        series.append(
            SessionData(
                sequence=sequence,
                scheduled_date=current,
                starts_at=local_calendar.compose(current, start_time),
                ends_at=local_calendar.compose(current, end_time),
                instructor_id=instructor_id,
            )
        )
    return series


def seed_dev_data(
    session: Session,
    holidays: HolidayCalendar,
    local_calendar: LocalCalendar | None = None,
) -> Classroom | None:
    """Populate the database with two instructors and a demo classroom."""
    local_calendar = local_calendar or LocalCalendar()

    if list_instructors(session):
        return None

    lead = create_instructor(session, full_name="Rosa Quispe", email="rosa.quispe@example.com")
    create_instructor(session, full_name="Jorge Salas", email="jorge.salas@example.com")

    classroom = create_classroom(
        session,
        code="SFD-DEMO-01",
        frequency="Mar y Jue",
        start_time="19:00",
        end_time="21:00",
        state=CLASSROOM_IN_PROGRESS,
    )
    first_date = next_valid_date(
        local_calendar.today(), weekdays_for(classroom.frequency), holidays
    )
    series = build_session_series(
        first_date,
        12,
        classroom.frequency,
        classroom.start_time,
        classroom.end_time,
        holidays=holidays,
        local_calendar=local_calendar,
        instructor_id=lead.id,
    )
    add_sessions(session, classroom, series)
    return classroom
