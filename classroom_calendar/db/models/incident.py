"""Incident audit model."""
from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import Date, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classroom_calendar.db import Base
from classroom_calendar.db.types import UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Incident(Base):
    """Append-only record of a replacement or reschedule."""

    __tablename__ = "incidents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    classroom_id: Mapped[int] = mapped_column(
        ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    classroom_code: Mapped[str] = mapped_column(String(64), nullable=False)
    session_sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    original_date: Mapped[date] = mapped_column(Date, nullable=False)
    kind: Mapped[str] = mapped_column(String(32), nullable=False)
    substitute_instructor_id: Mapped[int | None] = mapped_column(
        ForeignKey("instructors.id", ondelete="SET NULL"), nullable=True
    )
    new_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    approval_state: Mapped[str] = mapped_column(String(32), nullable=False, default="approved")
    registered_by: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_utcnow)

    classroom: Mapped["Classroom"] = relationship("Classroom", back_populates="incidents")

    def __repr__(self) -> str:  # pragma: no cover
        return f"Incident(id={self.id!r}, kind={self.kind!r})"


@event.listens_for(Incident, "before_update")
def _reject_incident_update(mapper, connection, target: Incident) -> None:
    raise ValueError(f"Incident {target.id} is append-only and cannot be modified")
