"""Shared fixtures for integration tests against a temporary SQLite file."""
from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from classroom_calendar.db import init_db
from classroom_calendar.services import HolidayCalendar, IncidentService, LocalCalendar
from classroom_calendar.services.repository import (
    CLASSROOM_IN_PROGRESS,
    SessionData,
    add_sessions,
    create_classroom,
    create_instructor,
)

ORIGINAL_DATES = (
    date(2024, 12, 24),
    date(2024, 12, 26),
    date(2024, 12, 31),
    date(2025, 1, 2),
)


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", future=True)
    init_db(bind=engine)
    factory = sessionmaker(bind=engine, expire_on_commit=False, future=True)
    yield factory
    engine.dispose()


@pytest.fixture
def local_calendar() -> LocalCalendar:
    return LocalCalendar(utc_offset_hours=-5)


@pytest.fixture
def holidays() -> HolidayCalendar:
    return HolidayCalendar.from_iterable(["2025-01-01"])


@pytest.fixture
def service(session_factory, holidays, local_calendar) -> IncidentService:
    return IncidentService(
        session_factory,
        holidays=holidays,
        local_calendar=local_calendar,
        registered_by="tests@example.com",
    )


def seed_classroom(
    session_factory,
    local_calendar: LocalCalendar,
    *,
    code: str = "SFD-2024-12",
    frequency: str = "Mar y Jue",
    dates=ORIGINAL_DATES,
) -> dict:
    with session_factory.begin() as session:
        lead = create_instructor(session, full_name="Ana Torres", email=f"ana.{code}@example.com")
        substitute = create_instructor(
            session, full_name="Beto Ramos", email=f"beto.{code}@example.com"
        )
        classroom = create_classroom(
            session,
            code=code,
            frequency=frequency,
            start_time="19:00",
            end_time="21:00",
            state=CLASSROOM_IN_PROGRESS,
        )
        records = add_sessions(
            session,
            classroom,
            [
                SessionData(
                    sequence=index,
                    scheduled_date=day,
                    starts_at=local_calendar.compose(day, "19:00"),
                    ends_at=local_calendar.compose(day, "21:00"),
                    instructor_id=lead.id,
                )
                for index, day in enumerate(dates, start=1)
            ],
        )
        return {
            "classroom_id": classroom.id,
            "session_ids": [record.id for record in records],
            "lead_id": lead.id,
            "substitute_id": substitute.id,
        }


@pytest.fixture
def seeded(session_factory, local_calendar) -> dict:
    return seed_classroom(session_factory, local_calendar)


@pytest.fixture
def classroom_factory(session_factory, local_calendar):
    def _make(**kwargs) -> dict:
        return seed_classroom(session_factory, local_calendar, **kwargs)

    return _make
