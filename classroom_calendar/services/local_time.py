"""Fixed-offset local calendar used to compose session instants."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from ..config import LOCAL_UTC_OFFSET_HOURS
from .errors import ConfigurationError

_TIME_OF_DAY = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


@dataclass(frozen=True)
class LocalCalendar:
    """Wall-clock calendar pinned to a UTC offset with no daylight saving.

    Instants are exact to the minute, so a session always lasts
    ``end_time - start_time`` whatever its date.
    """

    utc_offset_hours: int = LOCAL_UTC_OFFSET_HOURS

    @property
    def tzinfo(self) -> timezone:
        return timezone(timedelta(hours=self.utc_offset_hours))

    def parse_time_of_day(self, value: str | time | None, field: str = "time") -> time:
        if isinstance(value, time):
            return value.replace(second=0, microsecond=0, tzinfo=None)
        if not value:
            raise ConfigurationError(f"Classroom {field} is not defined")
        match = _TIME_OF_DAY.match(value)
        if match is None:
            raise ConfigurationError(f"Invalid {field} {value!r}; expected HH:MM")
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            raise ConfigurationError(f"Invalid {field} {value!r}; expected HH:MM")
        return time(hour, minute)

    def compose(self, day: date, time_of_day: str | time) -> datetime:
        """Combine ``day`` with a wall-clock time into an aware instant."""

        moment = self.parse_time_of_day(time_of_day)
        return datetime.combine(day, moment, tzinfo=self.tzinfo)

    def localize(self, instant: datetime) -> datetime:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(self.tzinfo)

    def now(self) -> datetime:
        return datetime.now(self.tzinfo)

    def today(self) -> date:
        return self.now().date()


__all__ = ["LocalCalendar"]
