"""Application configuration settings."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final

BASE_DIR: Final[Path] = Path(__file__).resolve().parent.parent
DATA_DIR: Final[Path] = Path(os.getenv("CLASSROOM_CALENDAR_DATA_DIR", str(BASE_DIR / "data")))

DATABASE_URL: Final[str] = os.getenv(
    "DATABASE_URL", f"sqlite:///{(DATA_DIR / 'classroom_calendar.db').as_posix()}"
)

# JSON list of ISO dates (or objects with a "date" key); the built-in
# national holiday list (2025-2026) is used when unset. Cascades that run
# past the last listed holiday are logged at WARNING.
_holidays_env = os.getenv("HOLIDAYS_PATH")
HOLIDAYS_PATH: Final[Path | None] = Path(_holidays_env) if _holidays_env else None

# Sessions are planned in a fixed local offset without daylight saving.
LOCAL_UTC_OFFSET_HOURS: Final[int] = int(os.getenv("LOCAL_UTC_OFFSET_HOURS", -5))

# Upper bound, in days, for the next-valid-date search.
SEARCH_HORIZON_DAYS: Final[int] = int(os.getenv("SEARCH_HORIZON_DAYS", 60))

DEFAULT_REGISTERED_BY: Final[str] = os.getenv("DEFAULT_REGISTERED_BY", "admin@sfd.com")
SEED_DEMO_DATA: Final[bool] = os.getenv("SEED_DEMO_DATA") == "1"

DATA_DIR.mkdir(parents=True, exist_ok=True)
