from __future__ import annotations

from datetime import datetime

import pytest
from PySide6.QtCore import QCoreApplication

from BackEnd.core.scheduler import ManualClock, ManualScheduler
from BackEnd.models.session import Mode, Session
from BackEnd.repos.local_store import LocalStorage


def local_ms(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> int:
    """Epoch milliseconds of a local wall-clock time."""
    return int(datetime(year, month, day, hour, minute, second).timestamp() * 1000)


def closed(start_ms: int, end_ms: int, mode: Mode = Mode.STOPWATCH) -> Session:
    return Session.close(start_ms, end_ms, mode)


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def storage():
    store = LocalStorage(":memory:").open()
    yield store
    store.close()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(local_ms(2024, 3, 15, 9, 0))


@pytest.fixture
def scheduler(clock: ManualClock) -> ManualScheduler:
    return ManualScheduler(clock)
