"""Tests for the pure cascade planner."""
from __future__ import annotations

import logging
from datetime import date, timedelta

import pytest

from classroom_calendar.services.cascade import (
    INCIDENT_REPLACEMENT,
    INCIDENT_RESCHEDULE,
    parse_anchor_date,
    plan_replacement,
    plan_reschedule,
)
from classroom_calendar.services.errors import (
    ConfigurationError,
    IncidentValidationError,
    InvalidAnchorDate,
    SearchExhausted,
    SessionNotFound,
)
from classroom_calendar.services.holidays import HolidayCalendar
from classroom_calendar.services.local_time import LocalCalendar
from classroom_calendar.services.repository import ClassroomSnapshot, SessionSnapshot

LOCAL = LocalCalendar(-5)
HOLIDAYS = HolidayCalendar.from_iterable(["2025-01-01"])


def _classroom(**overrides) -> ClassroomSnapshot:
    values = dict(
        id=1,
        code="SFD-2024-12",
        frequency="Mar y Jue",
        start_time="19:00",
        end_time="21:00",
        state="in_progress",
    )
    values.update(overrides)
    return ClassroomSnapshot(**values)


def _sessions(*days: date) -> tuple[SessionSnapshot, ...]:
    return tuple(
        SessionSnapshot(
            id=100 + sequence,
            classroom_id=1,
            sequence=sequence,
            scheduled_date=day,
            starts_at=LOCAL.compose(day, "19:00"),
            ends_at=LOCAL.compose(day, "21:00"),
            state="scheduled",
            instructor_id=7,
            version=1,
        )
        for sequence, day in enumerate(days, start=1)
    )


SESSIONS = _sessions(date(2024, 12, 24), date(2024, 12, 26), date(2024, 12, 31), date(2025, 1, 2))


def _plan(session_id: int = 102, anchor="2025-01-01", **kwargs):
    classroom = kwargs.pop("classroom", _classroom())
    sessions = kwargs.pop("sessions", SESSIONS)
    kwargs.setdefault("holidays", HOLIDAYS)
    kwargs.setdefault("local_calendar", LOCAL)
    return plan_reschedule(classroom, sessions, session_id, anchor, "Instructor travelling", **kwargs)


def test_reschedule_places_anchor_verbatim_and_cascades() -> None:
    plan = _plan()

    # The anchor lands on a holiday and is kept as given.
    assert plan.target.scheduled_date == date(2025, 1, 1)
    assert plan.target.state == "rescheduled"
    assert plan.target.starts_at == LOCAL.compose(date(2025, 1, 1), "19:00")
    assert [change.scheduled_date for change in plan.subsequent] == [date(2025, 1, 2), date(2025, 1, 7)]
    assert [change.session_id for change in plan.subsequent] == [103, 104]
    assert all(change.state is None for change in plan.subsequent)
    assert plan.subsequent[-1].ends_at == LOCAL.compose(date(2025, 1, 7), "21:00")


def test_reschedule_leaves_earlier_sessions_out_of_the_plan() -> None:
    plan = _plan()

    assert {change.session_id for change in plan.changes} == {102, 103, 104}
    assert all(change.expected_version == 1 for change in plan.changes)


def test_reschedule_incident_entry() -> None:
    incident = _plan().incident

    assert incident.kind == INCIDENT_RESCHEDULE
    assert incident.session_sequence == 2
    assert incident.original_date == date(2024, 12, 26)
    assert incident.new_date == date(2025, 1, 1)
    assert incident.reason == "Instructor travelling"
    assert incident.classroom_code == "SFD-2024-12"


def test_planning_is_repeatable() -> None:
    assert _plan() == _plan()


def test_sessions_are_ordered_by_sequence_not_input_order() -> None:
    shuffled = tuple(reversed(SESSIONS))

    assert _plan(sessions=shuffled) == _plan()


def test_cascade_properties_over_long_series() -> None:
    start = date(2025, 1, 7)
    sessions = _sessions(*(start + timedelta(days=7 * week) for week in range(10)))
    holidays = HolidayCalendar.from_iterable(["2025-01-09", "2025-01-21", "2025-01-23"])

    plan = _plan(session_id=101, anchor=date(2025, 1, 8), sessions=sessions, holidays=holidays)

    dates = [plan.target.scheduled_date] + [change.scheduled_date for change in plan.subsequent]
    assert all(earlier < later for earlier, later in zip(dates, dates[1:]))
    for change in plan.subsequent:
        assert change.scheduled_date.weekday() in {1, 3}
        assert change.scheduled_date not in holidays
        assert change.ends_at - change.starts_at == timedelta(hours=2)
    assert dates[1:4] == [date(2025, 1, 14), date(2025, 1, 16), date(2025, 1, 28)]


def test_rescheduling_last_session_has_no_cascade() -> None:
    plan = _plan(session_id=104, anchor="2025-01-09")

    assert plan.subsequent == ()
    assert plan.target.scheduled_date == date(2025, 1, 9)


def test_anchor_accepts_past_dates() -> None:
    plan = _plan(session_id=101, anchor="2024-12-20")

    assert plan.target.scheduled_date == date(2024, 12, 20)
    assert plan.subsequent[0].scheduled_date == date(2024, 12, 24)


@pytest.mark.parametrize(
    "classroom",
    [
        _classroom(frequency="Mensual"),
        _classroom(start_time=None),
        _classroom(end_time="25:00"),
        _classroom(start_time="21:00", end_time="19:00"),
    ],
)
def test_classroom_configuration_is_validated(classroom) -> None:
    with pytest.raises(ConfigurationError):
        _plan(classroom=classroom)


def test_invalid_anchor_date() -> None:
    with pytest.raises(InvalidAnchorDate):
        _plan(anchor="2025-02-30")
    with pytest.raises(InvalidAnchorDate):
        _plan(anchor=None)


def test_unknown_session() -> None:
    with pytest.raises(SessionNotFound):
        _plan(session_id=999)


def test_blank_reason() -> None:
    with pytest.raises(IncidentValidationError):
        plan_reschedule(
            _classroom(), SESSIONS, 102, "2025-01-01", "  ", holidays=HOLIDAYS, local_calendar=LOCAL
        )


def test_search_exhaustion_propagates() -> None:
    with pytest.raises(SearchExhausted):
        _plan(anchor="2025-01-02", horizon_days=1)


def test_parse_anchor_date_forms() -> None:
    assert parse_anchor_date(" 2025-01-01 ") == date(2025, 1, 1)
    assert parse_anchor_date(date(2025, 1, 1)) == date(2025, 1, 1)


def test_replacement_plan_changes_only_instructor_and_state() -> None:
    plan = plan_replacement(_classroom(), SESSIONS, 103, 8, " Lead instructor ill ")

    assert plan.changes == (plan.target,)
    assert plan.target.instructor_id == 8
    assert plan.target.state == "replaced"
    assert plan.target.scheduled_date is None
    assert plan.target.starts_at is None
    assert plan.incident.kind == INCIDENT_REPLACEMENT
    assert plan.incident.reason == "Lead instructor ill"
    assert plan.incident.substitute_instructor_id == 8
    assert plan.incident.new_date is None


def test_replacement_requires_substitute_and_reason() -> None:
    with pytest.raises(IncidentValidationError):
        plan_replacement(_classroom(), SESSIONS, 103, None, "Cover")
    with pytest.raises(IncidentValidationError):
        plan_replacement(_classroom(), SESSIONS, 103, 8, "")


def test_cascade_past_last_known_holiday_is_logged(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="classroom_calendar.services.cascade"):
        plan = _plan()

    assert plan.subsequent[-1].scheduled_date == date(2025, 1, 7)
    assert "past the last known holiday 2025-01-01" in caplog.text


def test_cascade_within_holiday_calendar_is_quiet(caplog) -> None:
    holidays = HolidayCalendar.from_iterable(["2025-01-01", "2025-12-25"])

    with caplog.at_level(logging.WARNING, logger="classroom_calendar.services.cascade"):
        _plan(holidays=holidays)

    assert caplog.records == []
