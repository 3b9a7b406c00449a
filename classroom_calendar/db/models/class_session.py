"""Class session model."""
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classroom_calendar.db import Base
from classroom_calendar.db.types import UTCDateTime


class ClassSession(Base):
    """One numbered meeting of a classroom."""

    __tablename__ = "class_sessions"
    __table_args__ = (UniqueConstraint("classroom_id", "sequence", name="uq_class_sessions_sequence"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    classroom_id: Mapped[int] = mapped_column(
        ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    scheduled_date: Mapped[date] = mapped_column(Date, nullable=False)
    starts_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    ends_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    state: Mapped[str] = mapped_column(String(32), nullable=False, default="scheduled")
    instructor_id: Mapped[int | None] = mapped_column(
        ForeignKey("instructors.id", ondelete="SET NULL"), nullable=True, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    classroom: Mapped["Classroom"] = relationship("Classroom", back_populates="sessions")
    instructor: Mapped["Instructor"] = relationship("Instructor")

    # Flushes emit "UPDATE ... WHERE version = ?" and bump the counter.
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:  # pragma: no cover
        return f"ClassSession(id={self.id!r}, sequence={self.sequence!r})"
