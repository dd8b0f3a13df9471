from __future__ import annotations

import pytest

from BackEnd.models.session import Mode
from BackEnd.repos.resume_store import ResumptionStore
from BackEnd.repos.session_store import SessionStore
from BackEnd.services.tracker_service import TrackerController


@pytest.fixture
def make_controller(storage, clock, scheduler):
    def _make(**kwargs) -> TrackerController:
        return TrackerController(
            SessionStore(storage),
            ResumptionStore(storage),
            scheduler,
            clock=clock,
            **kwargs,
        )

    return _make


def test_stop_records_elapsed_interval(make_controller, clock, scheduler, storage) -> None:
    controller = make_controller()
    start = clock()
    controller.start()
    scheduler.advance(90_500)

    session = controller.stop()

    assert session.start_time == start
    assert session.end_time - session.start_time == 90_500
    assert session.duration == 90
    assert session.mode is Mode.STOPWATCH
    assert SessionStore(storage).sessions == [session]
    assert not controller.running


def test_ticks_report_seconds_since_start(make_controller, scheduler) -> None:
    controller = make_controller()
    ticks: list[int] = []
    controller.tick.connect(lambda value: ticks.append(value))

    controller.start()
    scheduler.advance(3_000)

    assert ticks == [0, 1, 2, 3]


def test_missed_ticks_do_not_drift_display(make_controller, scheduler) -> None:
    controller = make_controller()
    controller.start()
    scheduler.jump(45_000)
    scheduler.advance(0)

    assert controller.elapsed_sec == 45


def test_start_while_running_is_ignored(make_controller, clock, scheduler) -> None:
    controller = make_controller()
    controller.start()
    first_start = controller.start_time
    scheduler.advance(5_000)
    controller.start()

    assert controller.start_time == first_start
    assert len(scheduler.active) == 1


def test_stop_when_idle_is_a_noop(make_controller, storage) -> None:
    controller = make_controller()
    assert controller.stop() is None
    assert len(SessionStore(storage)) == 0


def test_double_stop_records_once(make_controller, scheduler, storage) -> None:
    controller = make_controller()
    controller.start()
    scheduler.advance(2_000)
    controller.stop()
    assert controller.stop() is None
    assert len(SessionStore(storage)) == 1
    assert scheduler.active == []


def test_reset_discards_run(make_controller, scheduler, storage) -> None:
    controller = make_controller()
    controller.start()
    scheduler.advance(10_000)
    controller.reset()

    assert len(SessionStore(storage)) == 0
    assert controller.display_seconds == 0
    assert storage.get("startTime") is None
    assert scheduler.active == []


def test_switch_mode_records_running_session(make_controller, scheduler, storage) -> None:
    controller = make_controller()
    controller.start()
    scheduler.advance(30_000)

    controller.switch_mode(Mode.TIMER)

    sessions = SessionStore(storage).sessions
    assert len(sessions) == 1
    assert sessions[0].mode is Mode.STOPWATCH
    assert sessions[0].duration == 30
    assert controller.mode is Mode.TIMER
    assert not controller.running
    assert controller.display_seconds == controller.timer_duration
    assert storage.get("trackerMode") == "timer"


def test_timer_counts_down_and_stops_at_zero(make_controller, scheduler, storage) -> None:
    controller = make_controller()
    controller.switch_mode("timer")
    controller.set_timer_minutes("1")
    recorded = []
    controller.session_recorded.connect(lambda session: recorded.append(session))

    controller.start()
    scheduler.advance(30_000)
    assert controller.remaining_sec == 30

    scheduler.advance(30_000)
    assert not controller.running
    assert len(recorded) == 1
    assert recorded[0].duration == 60
    assert recorded[0].mode is Mode.TIMER
    assert SessionStore(storage).sessions == recorded
    assert scheduler.active == []


def test_timer_expiring_during_missed_ticks_records_full_duration(make_controller, scheduler) -> None:
    controller = make_controller()
    controller.switch_mode(Mode.TIMER)
    controller.set_timer_minutes("1")
    recorded = []
    controller.session_recorded.connect(lambda session: recorded.append(session))

    controller.start()
    scheduler.jump(10 * 60_000)
    scheduler.advance(0)

    assert not controller.running
    assert recorded[0].duration == 60


def test_running_stopwatch_resumes_after_restart(make_controller, clock, scheduler) -> None:
    first = make_controller()
    start = clock()
    first.start()
    first.shutdown()
    scheduler.jump(45_000)

    second = make_controller()

    assert second.running
    assert second.start_time == start
    assert second.elapsed_sec == 45
    scheduler.advance(1_000)
    assert second.elapsed_sec == 46


def test_expired_timer_is_recorded_on_restart(storage, clock, make_controller) -> None:
    start = clock()
    ResumptionStore(storage).save_run(Mode.TIMER, start, 300)
    clock.advance(600_000)

    controller = make_controller()

    sessions = SessionStore(storage).sessions
    assert not controller.running
    assert controller.mode is Mode.TIMER
    assert len(sessions) == 1
    assert sessions[0].duration == 300
    assert sessions[0].start_time == start
    assert storage.get("startTime") is None


def test_malformed_resume_state_starts_idle(storage, make_controller) -> None:
    storage.set("trackerMode", "timer")
    storage.set("startTime", "not-a-number")

    controller = make_controller()

    assert not controller.running
    assert controller.mode is Mode.STOPWATCH


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("45", 45 * 60),
        (" 12", 12 * 60),
        ("2.5", 2 * 60),
        ("30 min", 30 * 60),
        ("abc", 25 * 60),
        ("0", 25 * 60),
        ("-5", 25 * 60),
        ("", 25 * 60),
    ],
)
def test_timer_minutes_use_leading_integer_or_default(make_controller, text, expected) -> None:
    controller = make_controller()
    assert controller.set_timer_minutes(text) == expected
    assert controller.remaining_sec == expected


def test_timer_length_change_does_not_affect_running_timer(make_controller, scheduler) -> None:
    controller = make_controller()
    controller.switch_mode(Mode.TIMER)
    controller.set_timer_minutes("2")
    controller.start()
    controller.set_timer_minutes("10")
    scheduler.advance(1_000)

    assert controller.remaining_sec == 119


def test_live_session_is_open_while_running(make_controller, clock, scheduler) -> None:
    controller = make_controller()
    assert controller.live_session() is None

    controller.start()
    scheduler.advance(12_000)
    live = controller.live_session()

    assert live.end_time is None
    assert live.duration == 12


def test_snapshot_reflects_state(make_controller, scheduler) -> None:
    controller = make_controller()
    controller.start()
    scheduler.advance(4_000)

    state = controller.snapshot()
    assert state.is_running
    assert state.display_seconds == 4
