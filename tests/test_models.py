from __future__ import annotations

import pytest
from pydantic import ValidationError

from BackEnd.models.session import DayData, Mode, Session, TimelineSlot
from BackEnd.models.state import ResumptionState

from conftest import local_ms


def test_close_derives_duration_and_date() -> None:
    start = local_ms(2024, 2, 10, 8, 0)
    session = Session.close(start, start + 61_999, Mode.TIMER)

    assert session.duration == 61
    assert session.date == "2024-02-10"
    assert session.mode is Mode.TIMER
    assert session.is_closed


def test_end_before_start_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Session(start_time=2_000, end_time=1_000, duration=0, mode="stopwatch", date="2024-01-01")


def test_negative_duration_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Session(start_time=0, end_time=0, duration=-1, mode="stopwatch", date="2024-01-01")


def test_wire_format_is_camel_case() -> None:
    session = Session.model_validate(
        {"startTime": 1_000, "endTime": 4_000, "duration": 3, "mode": "timer", "date": "2024-01-01"}
    )
    assert session.start_time == 1_000
    assert session.to_json() == {
        "startTime": 1_000,
        "endTime": 4_000,
        "duration": 3,
        "mode": "timer",
        "date": "2024-01-01",
    }


def test_open_session_omits_end_time() -> None:
    session = Session(start_time=1_000, duration=0, mode=Mode.STOPWATCH, date="2024-01-01")
    assert not session.is_closed
    assert "endTime" not in session.to_json()


def test_unknown_mode_and_bad_date_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Session(start_time=0, end_time=0, duration=0, mode="pomodoro", date="2024-01-01")
    with pytest.raises(ValidationError):
        Session(start_time=0, end_time=0, duration=0, mode="timer", date="01/01/2024")


def test_day_data_hours_and_slot_percentage() -> None:
    assert DayData(date="2024-01-01", total_minutes=95).hours == 1.6
    assert TimelineSlot(hour=9, label="9 AM", worked_minutes=15).worked_percentage == 25


def test_resumption_state_requires_duration_for_running_timer() -> None:
    with pytest.raises(ValidationError):
        ResumptionState(mode=Mode.TIMER, start_time=1_000)
    state = ResumptionState(mode=Mode.TIMER, timer_duration=300)
    assert not state.running
