"""Endpoint tests calling the FastAPI handlers directly."""
from __future__ import annotations

from datetime import date

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from classroom_calendar.app import (
    app,
    health_check,
    list_incidents_endpoint,
    list_instructors_endpoint,
)
from classroom_calendar.db.models import Classroom
from classroom_calendar.routers.classrooms import (
    get_classroom,
    list_classrooms,
    list_sessions,
    preview_reschedule,
    register_replacement,
    register_reschedule,
)
from classroom_calendar.schemas import ReplacementRequest, RescheduleRequest
from classroom_calendar.services import commit_plan


def test_health_check() -> None:
    assert health_check() == {"status": "ok"}


def test_list_classrooms_returns_active_only(session_factory, seeded, classroom_factory) -> None:
    finished = classroom_factory(code="SFD-OLD")
    with session_factory.begin() as session:
        session.get(Classroom, finished["classroom_id"]).state = "finished"

    with session_factory() as session:
        classrooms = list_classrooms(db=session)

    assert [item.code for item in classrooms] == ["SFD-2024-12"]
    assert classrooms[0].end_date == date(2025, 1, 2)


def test_get_classroom_not_found(session_factory) -> None:
    with session_factory() as session:
        with pytest.raises(HTTPException) as exc_info:
            get_classroom(404, db=session)
    assert exc_info.value.status_code == 404


def test_reschedule_endpoint_commits_and_lists_incident(service, session_factory, seeded) -> None:
    payload = RescheduleRequest(
        session_id=seeded["session_ids"][1],
        new_date=date(2025, 1, 1),
        reason="Instructor travelling",
        registered_by="coordinator@example.com",
    )

    response = register_reschedule(seeded["classroom_id"], payload, service=service)

    assert response.kind == "reschedule"
    assert response.end_date == date(2025, 1, 7)
    assert response.warnings == []

    with session_factory() as session:
        sessions = list_sessions(seeded["classroom_id"], manageable=False, db=session, service=service)
        incidents = list_incidents_endpoint(classroom_id=seeded["classroom_id"], db=session)

    assert [item.scheduled_date for item in sessions][1:] == [
        date(2025, 1, 1),
        date(2025, 1, 2),
        date(2025, 1, 7),
    ]
    assert len(incidents) == 1
    assert incidents[0].registered_by == "coordinator@example.com"
    assert incidents[0].detail == "Moved from 26/12/2024 to 01/01/2025"


def test_preview_does_not_write(service, session_factory, seeded) -> None:
    payload = RescheduleRequest(
        session_id=seeded["session_ids"][1], new_date=date(2025, 1, 1), reason="Check first"
    )

    preview = preview_reschedule(seeded["classroom_id"], payload, service=service)

    assert preview.target.scheduled_date == date(2025, 1, 1)
    assert [item.scheduled_date for item in preview.subsequent] == [date(2025, 1, 2), date(2025, 1, 7)]
    with session_factory() as session:
        assert list_incidents_endpoint(classroom_id=None, db=session) == []


def test_replacement_endpoint_and_instructor_listing(service, session_factory, seeded) -> None:
    payload = ReplacementRequest(
        session_id=seeded["session_ids"][2],
        substitute_instructor_id=seeded["substitute_id"],
        reason="Lead instructor ill",
    )

    response = register_replacement(seeded["classroom_id"], payload, service=service)

    assert response.updated_session_ids == [seeded["session_ids"][2]]
    with session_factory() as session:
        incidents = list_incidents_endpoint(classroom_id=None, db=session)
        instructors = list_instructors_endpoint(db=session)
    assert incidents[0].detail == "Replacement on 31/12/2024"
    assert [item.full_name for item in instructors] == ["Ana Torres", "Beto Ramos"]


def test_configuration_error_maps_to_422(service, classroom_factory) -> None:
    seeded = classroom_factory(code="SFD-BAD", frequency="Mensual")
    payload = RescheduleRequest(
        session_id=seeded["session_ids"][0], new_date=date(2025, 1, 1), reason="Any reason"
    )

    with pytest.raises(HTTPException) as exc_info:
        register_reschedule(seeded["classroom_id"], payload, service=service)

    assert exc_info.value.status_code == 422
    assert exc_info.value.detail == "Unrecognised frequency: 'Mensual'"


def test_unknown_session_maps_to_404(service, seeded) -> None:
    payload = ReplacementRequest(
        session_id=9999, substitute_instructor_id=seeded["substitute_id"], reason="Cover"
    )

    with pytest.raises(HTTPException) as exc_info:
        register_replacement(seeded["classroom_id"], payload, service=service)

    assert exc_info.value.status_code == 404


def test_stale_commit_maps_to_409(service, seeded, monkeypatch) -> None:
    stale = service.preview_reschedule(
        seeded["classroom_id"], seeded["session_ids"][0], "2024-12-23", "Stale"
    )
    commit_plan(service.session_factory, stale, "someone@example.com")

    # Replay the stale plan through the endpoint.
    monkeypatch.setattr(service, "preview_reschedule", lambda *args, **kwargs: stale)
    payload = RescheduleRequest(
        session_id=seeded["session_ids"][0], new_date=date(2024, 12, 23), reason="Stale"
    )

    with pytest.raises(HTTPException) as exc_info:
        register_reschedule(seeded["classroom_id"], payload, service=service)

    assert exc_info.value.status_code == 409


def test_blank_reason_is_rejected_by_schema() -> None:
    with pytest.raises(ValidationError):
        RescheduleRequest(session_id=1, new_date=date(2025, 1, 1), reason="   ")


def test_classroom_listing_is_served_without_trailing_slash() -> None:
    paths = {route.path for route in app.routes}

    assert "/classrooms" in paths
    assert "/classrooms/" not in paths
