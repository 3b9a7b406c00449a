"""Holiday calendar loaded once per process and treated as immutable."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Iterator

LOGGER = logging.getLogger(__name__)

# National holidays for the current planning horizon.
DEFAULT_HOLIDAYS: tuple[str, ...] = (
    "2025-01-01",
    "2025-04-17",
    "2025-04-18",
    "2025-05-01",
    "2025-06-07",
    "2025-06-29",
    "2025-07-23",
    "2025-07-28",
    "2025-07-29",
    "2025-08-06",
    "2025-08-30",
    "2025-10-08",
    "2025-11-01",
    "2025-12-08",
    "2025-12-09",
    "2025-12-25",
    "2026-01-01",
    "2026-04-02",
    "2026-04-03",
    "2026-05-01",
    "2026-06-07",
    "2026-06-29",
    "2026-07-23",
    "2026-07-28",
    "2026-07-29",
    "2026-08-06",
    "2026-08-30",
    "2026-10-08",
    "2026-11-01",
    "2026-12-08",
    "2026-12-09",
    "2026-12-25",
)


def _coerce_date(value: object) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise TypeError(f"Unsupported date value: {value!r}")


@dataclass(frozen=True)
class HolidayCalendar:
    """Immutable set of dates on which no session may be placed."""

    dates: frozenset[date] = frozenset()

    @classmethod
    def from_iterable(cls, values: Iterable[date | str]) -> "HolidayCalendar":
        return cls(frozenset(_coerce_date(value) for value in values))

    def is_holiday(self, day: date) -> bool:
        return day in self.dates

    def ordered(self) -> list[date]:
        return sorted(self.dates)

    @property
    def last_known(self) -> date | None:
        return max(self.dates) if self.dates else None

    def covers(self, day: date) -> bool:
        """False when ``day`` is later than every listed holiday.

        An empty calendar covers every day.
        """

        return self.last_known is None or day <= self.last_known

    def __contains__(self, day: object) -> bool:
        return day in self.dates

    def __iter__(self) -> Iterator[date]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self.dates)


def load_holiday_calendar(path: Path | None = None) -> HolidayCalendar:
    """Read a holiday file, falling back to :data:`DEFAULT_HOLIDAYS`.

    The file holds a JSON list whose items are ISO dates or objects with a
    ``date`` key (an optional ``name`` is ignored).
    """

    if path is None:
        return HolidayCalendar.from_iterable(DEFAULT_HOLIDAYS)

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Holiday file {path} must contain a JSON list")

    values: list[str] = []
    for item in payload:
        if isinstance(item, dict):
            if "date" not in item:
                raise ValueError(f"Holiday file {path} has an entry without a date: {item!r}")
            values.append(item["date"])
        elif isinstance(item, str):
            values.append(item)
        else:
            raise ValueError(f"Holiday file {path} has an unsupported entry: {item!r}")
    try:
        calendar = HolidayCalendar.from_iterable(values)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Holiday file {path} has an invalid date: {exc}") from exc
    LOGGER.info("Loaded %d holidays from %s", len(calendar), path)
    return calendar


__all__ = ["DEFAULT_HOLIDAYS", "HolidayCalendar", "load_holiday_calendar"]
