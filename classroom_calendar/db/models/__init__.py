"""SQLAlchemy model package."""
from classroom_calendar.db.models.class_session import ClassSession
from classroom_calendar.db.models.classroom import Classroom
from classroom_calendar.db.models.incident import Incident
from classroom_calendar.db.models.instructor import Instructor

__all__ = [
    "ClassSession",
    "Classroom",
    "Incident",
    "Instructor",
]
