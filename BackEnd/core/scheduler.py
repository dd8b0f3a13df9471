"""Tick sources for the tracker.

`QtScheduler` drives the running app from the Qt event loop. `ManualClock`
and `ManualScheduler` are deterministic stand-ins used by the tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from PySide6.QtCore import QTimer


class TickHandle(Protocol):
	def cancel(self) -> None:
		...


class Scheduler(Protocol):
	"""schedule(callback, interval) -> cancellation handle."""

	def schedule(self, callback: Callable[[], None], interval_ms: int) -> TickHandle:
		...


class _QtHandle:
	def __init__(self, timer: QTimer):
		self._timer = timer

	def cancel(self) -> None:
		if self._timer is not None:
			self._timer.stop()
			self._timer.deleteLater()
			self._timer = None


class QtScheduler:
	def __init__(self, parent=None):
		self._parent = parent

	def schedule(self, callback, interval_ms):
		timer = QTimer(self._parent)
		timer.setInterval(interval_ms)
		timer.timeout.connect(callback)
		timer.start()
		return _QtHandle(timer)


class ManualClock:
	"""Settable epoch-millisecond clock; call it to read the time."""

	def __init__(self, start_ms: int = 0):
		self._now = start_ms

	def __call__(self) -> int:
		return self._now

	def set(self, ms: int) -> None:
		self._now = ms

	def advance(self, ms: int) -> None:
		self._now += ms


@dataclass
class _ManualHandle:
	callback: Callable[[], None]
	interval_ms: int
	next_due: int
	cancelled: bool = False

	def cancel(self) -> None:
		self.cancelled = True


class ManualScheduler:
	"""Fires scheduled callbacks only when the test moves time forward."""

	def __init__(self, clock: ManualClock):
		self._clock = clock
		self._handles: list[_ManualHandle] = []

	def schedule(self, callback, interval_ms):
		handle = _ManualHandle(callback, interval_ms, self._clock() + interval_ms)
		self._handles.append(handle)
		return handle

	@property
	def active(self) -> list[_ManualHandle]:
		self._handles = [h for h in self._handles if not h.cancelled]
		return list(self._handles)

	def advance(self, ms: int) -> None:
		"""Move the clock forward, firing every tick that falls due on the way."""
		target = self._clock() + ms
		while True:
			due = [h for h in self.active if h.next_due <= target]
			if not due:
				break
			handle = min(due, key=lambda h: h.next_due)
			self._clock.set(handle.next_due)
			handle.next_due += handle.interval_ms
			handle.callback()
		self._clock.set(target)

	def jump(self, ms: int) -> None:
		"""Move the clock forward without firing, the way a suspended process misses ticks.

		Missed ticks collapse into a single tick due at the new time.
		"""
		self._clock.advance(ms)
		now = self._clock()
		for handle in self.active:
			if handle.next_due < now:
				handle.next_due = now
