"""Apply a planned incident to storage as a single transaction."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from classroom_calendar.db.models import ClassSession, Incident

from .cascade import CascadePlan, ReplacementPlan, SessionChange
from .errors import CommitAborted, ConcurrentModification, storage_message

LOGGER = logging.getLogger(__name__)


def _apply_change(session: Session, classroom_id: int, change: SessionChange) -> None:
    record = session.get(ClassSession, change.session_id)
    if record is None or record.classroom_id != classroom_id:
        raise CommitAborted(
            f"Session {change.session_id} does not belong to classroom {classroom_id}"
        )
    if record.version != change.expected_version:
        raise ConcurrentModification(
            f"Session {record.sequence} was modified after the plan was built; reload and retry"
        )

    if change.scheduled_date is not None:
        record.scheduled_date = change.scheduled_date
    if change.starts_at is not None:
        record.starts_at = change.starts_at
    if change.ends_at is not None:
        record.ends_at = change.ends_at
    if change.state is not None:
        record.state = change.state
    if change.instructor_id is not None:
        record.instructor_id = change.instructor_id


def commit_plan(
    session_factory: sessionmaker,
    plan: CascadePlan | ReplacementPlan,
    registered_by: str,
) -> int:
    """Write every session change and the incident record, or nothing.

    Returns the new incident id. Raises :class:`CommitAborted` (or its
    :class:`ConcurrentModification` subclass) when the transaction fails; in
    that case no session reflects any part of the plan.
    """

    entry = plan.incident
    try:
        with session_factory.begin() as session:
            for change in plan.changes:
                _apply_change(session, plan.classroom_id, change)

            incident = Incident(
                classroom_id=entry.classroom_id,
                classroom_code=entry.classroom_code,
                session_sequence=entry.session_sequence,
                original_date=entry.original_date,
                kind=entry.kind,
                substitute_instructor_id=entry.substitute_instructor_id,
                new_date=entry.new_date,
                reason=entry.reason,
                approval_state="approved",
                registered_by=registered_by,
            )
            session.add(incident)
            session.flush()
            incident_id = incident.id
    except CommitAborted as exc:
        LOGGER.warning("Aborted %s commit for classroom %s: %s", entry.kind, plan.classroom_id, exc)
        raise
    except StaleDataError as exc:
        LOGGER.warning("Concurrent update detected for classroom %s", plan.classroom_id)
        raise ConcurrentModification(
            "Sessions changed while the incident was being saved; reload and retry"
        ) from exc
    except SQLAlchemyError as exc:
        LOGGER.warning("Storage rejected %s for classroom %s: %s", entry.kind, plan.classroom_id, exc)
        raise CommitAborted(f"Storage rejected the update: {storage_message(exc)}") from exc

    LOGGER.info(
        "Committed %s for classroom %s: %d session(s) updated, incident %s",
        entry.kind,
        plan.classroom_id,
        len(plan.changes),
        incident_id,
    )
    return incident_id


__all__ = ["commit_plan"]
