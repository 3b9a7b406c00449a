"""Weekly recurrence table mapping frequency labels to weekdays."""
from __future__ import annotations

from calendar import FRIDAY, MONDAY, SATURDAY, SUNDAY, THURSDAY, TUESDAY, WEDNESDAY
from types import MappingProxyType
from typing import Final, Mapping

from .errors import ConfigurationError

# Labels are the values stored on classroom records; long and short forms
# coexist in existing data.
RECURRENCE_TABLE: Final[Mapping[str, frozenset[int]]] = MappingProxyType(
    {
        "Lun-Mié-Vie (3 veces/semana)": frozenset({MONDAY, WEDNESDAY, FRIDAY}),
        "Martes y Jueves (2 veces/semana)": frozenset({TUESDAY, THURSDAY}),
        "Sábados y Domingos (2 veces/semana)": frozenset({SATURDAY, SUNDAY}),
        "Lunes y Miércoles (2 veces/semana)": frozenset({MONDAY, WEDNESDAY}),
        "Lun, Mié y Vie": frozenset({MONDAY, WEDNESDAY, FRIDAY}),
        "Mar y Jue": frozenset({TUESDAY, THURSDAY}),
        "Sáb y Dom": frozenset({SATURDAY, SUNDAY}),
        "Lun y Mié": frozenset({MONDAY, WEDNESDAY}),
    }
)


def weekdays_for(
    frequency: str | None, table: Mapping[str, frozenset[int]] = RECURRENCE_TABLE
) -> frozenset[int]:
    """Return the allowed weekdays (Monday=0) for ``frequency``."""

    if not frequency or frequency not in table:
        raise ConfigurationError(f"Unrecognised frequency: {frequency!r}")
    weekdays = table[frequency]
    if not weekdays:
        raise ConfigurationError(f"Frequency {frequency!r} has no weekdays")
    return weekdays


__all__ = ["RECURRENCE_TABLE", "weekdays_for"]
