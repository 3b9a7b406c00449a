"""Best-effort recomputation of a classroom's end date."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from classroom_calendar.db.models import ClassSession, Classroom

from .errors import storage_message

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SpanOutcome:
    end_date: date | None = None
    warning: str | None = None

    @property
    def ok(self) -> bool:
        return self.warning is None


def recompute_span(session_factory: sessionmaker, classroom_id: int) -> SpanOutcome:
    """Set the classroom end date to its latest session date.

    Runs in its own transaction after an incident is committed. Failures are
    logged and reported through :attr:`SpanOutcome.warning`, never raised.
    """

    try:
        with session_factory.begin() as session:
            classroom = session.get(Classroom, classroom_id)
            if classroom is None:
                warning = f"Classroom {classroom_id} disappeared before its end date was updated"
                LOGGER.warning(warning)
                return SpanOutcome(warning=warning)
            latest = session.scalar(
                select(func.max(ClassSession.scheduled_date)).where(
                    ClassSession.classroom_id == classroom_id
                )
            )
            if latest is None:
                return SpanOutcome()
            classroom.end_date = latest
    except SQLAlchemyError as exc:
        LOGGER.warning("Could not recompute end date for classroom %s: %s", classroom_id, exc)
        return SpanOutcome(warning=f"End date not updated: {storage_message(exc)}")

    LOGGER.info("Classroom %s end date set to %s", classroom_id, latest.isoformat())
    return SpanOutcome(end_date=latest)


__all__ = ["SpanOutcome", "recompute_span"]
