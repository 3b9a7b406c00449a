"""FastAPI dependencies for shared services."""
from __future__ import annotations

from typing import Iterator

from sqlalchemy.orm import Session

from .config import DEFAULT_REGISTERED_BY, HOLIDAYS_PATH, LOCAL_UTC_OFFSET_HOURS
from .db import SessionLocal
from .services.holidays import load_holiday_calendar
from .services.incidents import IncidentService
from .services.local_time import LocalCalendar


incident_service = IncidentService(
    SessionLocal,
    holidays=load_holiday_calendar(HOLIDAYS_PATH),
    local_calendar=LocalCalendar(LOCAL_UTC_OFFSET_HOURS),
    registered_by=DEFAULT_REGISTERED_BY,
)


def get_db() -> Iterator[Session]:  # pragma: no cover - thin wrapper for dependency injection
    """Expose a read-only ORM session dependency."""

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_incident_service() -> IncidentService:
    """Return the singleton incident service instance."""

    return incident_service
