"""Database configuration and session management utilities."""
from __future__ import annotations

import contextlib
import os
import sqlite3
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from classroom_calendar.config import DATABASE_URL

DATABASE_PRAGMA = "PRAGMA foreign_keys = ON"

engine = create_engine(DATABASE_URL, future=True, echo=os.getenv("SQLALCHEMY_ECHO") == "1")
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute(DATABASE_PRAGMA)
        cursor.close()


def init_db(bind: Engine | None = None) -> None:
    """Create database tables for all registered models."""
    from classroom_calendar.db import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


@contextlib.contextmanager
def get_session() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "Base",
    "DATABASE_URL",
    "SessionLocal",
    "engine",
    "init_db",
    "get_session",
]
