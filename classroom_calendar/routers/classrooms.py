"""Classroom endpoints: session listings and incident actions."""
from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..dependencies import get_db, get_incident_service
from ..schemas import (
    ClassroomRead,
    IncidentOutcomeResponse,
    ReplacementRequest,
    ReschedulePreviewResponse,
    RescheduleRequest,
    SessionChangeRead,
    SessionRead,
)
from ..services import IncidentOutcome, IncidentService
from ..services.errors import (
    ClassroomNotFound,
    CommitAborted,
    ConcurrentModification,
    InstructorNotFound,
    PlanningError,
    SessionNotFound,
)
from ..services.repository import (
    list_active_classrooms,
    list_manageable_sessions,
    load_classroom,
    load_sessions,
)

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/classrooms", tags=["classrooms"])


def _raise_http(exc: Exception) -> NoReturn:
    if isinstance(exc, (ClassroomNotFound, SessionNotFound, InstructorNotFound)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, PlanningError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    if isinstance(exc, ConcurrentModification):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if isinstance(exc, CommitAborted):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    raise exc


def _outcome_response(outcome: IncidentOutcome) -> IncidentOutcomeResponse:
    return IncidentOutcomeResponse(
        incident_id=outcome.incident_id,
        kind=outcome.kind,
        updated_session_ids=list(outcome.updated_session_ids),
        end_date=outcome.end_date,
        warnings=list(outcome.warnings),
    )


@router.get("", response_model=list[ClassroomRead])
def list_classrooms(db: Session = Depends(get_db)) -> list[ClassroomRead]:
    return [ClassroomRead.model_validate(item) for item in list_active_classrooms(db)]


@router.get("/{classroom_id}", response_model=ClassroomRead)
def get_classroom(classroom_id: int, db: Session = Depends(get_db)) -> ClassroomRead:
    try:
        return ClassroomRead.model_validate(load_classroom(db, classroom_id))
    except ClassroomNotFound as exc:
        _raise_http(exc)


@router.get("/{classroom_id}/sessions", response_model=list[SessionRead])
def list_sessions(
    classroom_id: int,
    manageable: bool = False,
    db: Session = Depends(get_db),
    service: IncidentService = Depends(get_incident_service),
) -> list[SessionRead]:
    try:
        if manageable:
            items = list_manageable_sessions(db, classroom_id, service.local_calendar.now())
        else:
            load_classroom(db, classroom_id)
            items = load_sessions(db, classroom_id)
    except ClassroomNotFound as exc:
        _raise_http(exc)
    return [SessionRead.model_validate(item) for item in items]


@router.post(
    "/{classroom_id}/incidents/replacement",
    response_model=IncidentOutcomeResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_replacement(
    classroom_id: int,
    payload: ReplacementRequest,
    service: IncidentService = Depends(get_incident_service),
) -> IncidentOutcomeResponse:
    try:
        outcome = service.plan_and_commit_replacement(
            classroom_id,
            payload.session_id,
            payload.substitute_instructor_id,
            payload.reason,
            registered_by=payload.registered_by,
        )
    except (PlanningError, CommitAborted) as exc:
        _raise_http(exc)
    return _outcome_response(outcome)


@router.post(
    "/{classroom_id}/incidents/reschedule",
    response_model=IncidentOutcomeResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_reschedule(
    classroom_id: int,
    payload: RescheduleRequest,
    service: IncidentService = Depends(get_incident_service),
) -> IncidentOutcomeResponse:
    try:
        outcome = service.plan_and_commit_reschedule(
            classroom_id,
            payload.session_id,
            payload.new_date,
            payload.reason,
            registered_by=payload.registered_by,
        )
    except (PlanningError, CommitAborted) as exc:
        _raise_http(exc)
    for warning in outcome.warnings:
        LOGGER.warning("Reschedule for classroom %s completed with warning: %s", classroom_id, warning)
    return _outcome_response(outcome)


@router.post(
    "/{classroom_id}/incidents/reschedule/preview",
    response_model=ReschedulePreviewResponse,
)
def preview_reschedule(
    classroom_id: int,
    payload: RescheduleRequest,
    service: IncidentService = Depends(get_incident_service),
) -> ReschedulePreviewResponse:
    try:
        plan = service.preview_reschedule(
            classroom_id, payload.session_id, payload.new_date, payload.reason
        )
    except PlanningError as exc:
        _raise_http(exc)
    return ReschedulePreviewResponse(
        classroom_id=plan.classroom_id,
        target=SessionChangeRead.model_validate(plan.target),
        subsequent=[SessionChangeRead.model_validate(change) for change in plan.subsequent],
    )


__all__ = ["router"]
