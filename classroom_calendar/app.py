"""FastAPI application exposing classroom incident endpoints."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from .config import SEED_DEMO_DATA
from .db import get_session, init_db
from .db.fixtures import seed_dev_data
from .dependencies import get_db, get_incident_service
from .routers import classrooms as classrooms_router
from .schemas import IncidentRead, InstructorRead
from .services.repository import list_incidents, list_instructors

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Classroom Calendar Service", version="0.3.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(classrooms_router.router)


@app.on_event("startup")
def startup_event() -> None:  # pragma: no cover - exercised indirectly
    init_db()
    if SEED_DEMO_DATA:
        service = get_incident_service()
        with get_session() as session:
            classroom = seed_dev_data(session, service.holidays, service.local_calendar)
        if classroom is not None:
            LOGGER.info("Seeded demo classroom %s", classroom.code)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/instructors", response_model=list[InstructorRead])
def list_instructors_endpoint(db: Session = Depends(get_db)) -> list[InstructorRead]:
    return [InstructorRead.model_validate(item) for item in list_instructors(db)]


@app.get("/incidents", response_model=list[IncidentRead])
def list_incidents_endpoint(
    classroom_id: int | None = None, db: Session = Depends(get_db)
) -> list[IncidentRead]:
    return [IncidentRead.from_record(item) for item in list_incidents(db, classroom_id)]


__all__ = [
    "app",
    "health_check",
    "list_incidents_endpoint",
    "list_instructors_endpoint",
]
