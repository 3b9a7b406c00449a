"""Classroom model."""
from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classroom_calendar.db import Base


class Classroom(Base):
    """A cohort meeting on a fixed weekly pattern."""

    __tablename__ = "classrooms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    frequency: Mapped[str] = mapped_column(String(128), nullable=False)
    start_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    state: Mapped[str] = mapped_column(String(32), nullable=False, default="upcoming")
    # Denormalised maximum session date, refreshed after each reschedule.
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    sessions: Mapped[list["ClassSession"]] = relationship(
        "ClassSession",
        back_populates="classroom",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ClassSession.sequence",
    )
    incidents: Mapped[list["Incident"]] = relationship(
        "Incident",
        back_populates="classroom",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Incident.id",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"Classroom(id={self.id!r}, code={self.code!r})"
