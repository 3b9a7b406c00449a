"""Instructor domain model."""
from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from classroom_calendar.db import Base


class Instructor(Base):
    """Represents a person who can lead or substitute a session."""

    __tablename__ = "instructors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"Instructor(id={self.id!r}, email={self.email!r})"
