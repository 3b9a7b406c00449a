"""Pydantic schemas shared across the classroom calendar API."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------------


class InstructorRead(BaseModel):
    id: int
    full_name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class ClassroomRead(BaseModel):
    id: int
    code: str
    frequency: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    state: str
    end_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class SessionRead(BaseModel):
    id: int
    classroom_id: int
    sequence: int
    scheduled_date: date
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    state: str
    instructor_id: Optional[int] = None
    version: int

    model_config = ConfigDict(from_attributes=True)


class IncidentRead(BaseModel):
    id: int
    classroom_id: int
    classroom_code: str
    session_sequence: int
    original_date: date
    kind: str
    substitute_instructor_id: Optional[int] = None
    new_date: Optional[date] = None
    reason: str
    approval_state: str
    registered_by: str
    created_at: datetime
    detail: str = ""

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_record(cls, record) -> "IncidentRead":
        item = cls.model_validate(record)
        return item.model_copy(update={"detail": describe_incident(item)})


def describe_incident(incident: IncidentRead) -> str:
    original = incident.original_date.strftime("%d/%m/%Y")
    if incident.kind == "replacement":
        return f"Replacement on {original}"
    if incident.kind == "reschedule" and incident.new_date is not None:
        return f"Moved from {original} to {incident.new_date.strftime('%d/%m/%Y')}"
    return ""


# ---------------------------------------------------------------------------
# Incident actions
# ---------------------------------------------------------------------------


class IncidentRequestBase(BaseModel):
    session_id: int
    reason: str = Field(..., min_length=1)
    registered_by: Optional[str] = None

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("reason must not be blank")
        return value


class ReplacementRequest(IncidentRequestBase):
    substitute_instructor_id: int


class RescheduleRequest(IncidentRequestBase):
    new_date: date


class SessionChangeRead(BaseModel):
    session_id: int
    sequence: int
    scheduled_date: Optional[date] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    state: Optional[str] = None
    instructor_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ReschedulePreviewResponse(BaseModel):
    classroom_id: int
    target: SessionChangeRead
    subsequent: List[SessionChangeRead] = Field(default_factory=list)


class IncidentOutcomeResponse(BaseModel):
    incident_id: int
    kind: str
    updated_session_ids: List[int]
    end_date: Optional[date] = None
    warnings: List[str] = Field(default_factory=list)


__all__ = [
    "ClassroomRead",
    "IncidentOutcomeResponse",
    "IncidentRead",
    "IncidentRequestBase",
    "InstructorRead",
    "ReplacementRequest",
    "ReschedulePreviewResponse",
    "RescheduleRequest",
    "SessionChangeRead",
    "SessionRead",
    "describe_incident",
]
