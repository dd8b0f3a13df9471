import logging
import re

from PySide6.QtCore import QObject, Signal

from BackEnd.core.clock import elapsed_seconds, local_date_str, now_ms, remaining_seconds
from BackEnd.models.session import Mode, Session, TrackerState
from BackEnd.repos.resume_store import ResumptionStore
from BackEnd.repos.session_store import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_TIMER_MINUTES = 25
TICK_MS = 1000
# "30 min" -> 30, "2.5" -> 2
LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TrackerController(QObject):
	"""Stopwatch/timer state machine.

	Displayed time is derived from the start time on every tick, never
	accumulated from tick counts.
	"""

	tick = Signal(int)  # emits displayed seconds (elapsed or remaining)
	state_changed = Signal(str)  # emits 'idle' or 'running'
	mode_changed = Signal(str)
	session_recorded = Signal(object)

	def __init__(
		self,
		sessions: SessionStore,
		resume_store: ResumptionStore,
		scheduler,
		clock=now_ms,
		default_minutes: int = DEFAULT_TIMER_MINUTES,
		parent=None,
	):
		super().__init__(parent)
		self._sessions = sessions
		self._resume = resume_store
		self._scheduler = scheduler
		self._clock = clock
		self._tick_handle = None
		self.default_minutes = default_minutes

		self.mode = Mode.STOPWATCH
		self.running = False
		self.start_time = None
		self.timer_duration = default_minutes * 60
		# fixed per run; timer_duration may be edited while a run is in flight
		self._run_duration = self.timer_duration
		self._timer_start = None
		self.elapsed_sec = 0
		self.remaining_sec = self.timer_duration
		self._restore()

	@property
	def display_seconds(self) -> int:
		return self.elapsed_sec if self.mode is Mode.STOPWATCH else self.remaining_sec

	def snapshot(self) -> TrackerState:
		return TrackerState(
			mode=self.mode,
			is_running=self.running,
			start_time=self.start_time,
			elapsed_sec=self.elapsed_sec,
			remaining_sec=self.remaining_sec,
			timer_duration=self.timer_duration,
		)

	def _restore(self):
		state = self._resume.load()
		self.mode = state.mode
		if state.timer_duration:
			self.timer_duration = state.timer_duration
			self.remaining_sec = state.timer_duration
		if not state.running:
			return
		now = self._clock()
		self.start_time = state.start_time
		self.running = True
		if self.mode is Mode.TIMER:
			self._run_duration = state.timer_duration
			self._timer_start = state.timer_start_time or state.start_time
			self.remaining_sec = remaining_seconds(self._timer_start, self._run_duration, now)
			if self.remaining_sec <= 0:
				logger.info("Timer expired while the tracker was closed; recording it")
				self.stop()
				return
		else:
			self.elapsed_sec = elapsed_seconds(self.start_time, now)
		logger.info("Resumed %s run started at %s", self.mode.value, self.start_time)
		self._arm()

	def _arm(self):
		self._disarm()
		self._tick_handle = self._scheduler.schedule(self._on_tick, TICK_MS)

	def _disarm(self):
		if self._tick_handle is not None:
			self._tick_handle.cancel()
			self._tick_handle = None

	def _on_tick(self):
		if not self.running:
			return
		now = self._clock()
		if self.mode is Mode.STOPWATCH:
			self.elapsed_sec = elapsed_seconds(self.start_time, now)
		else:
			self.remaining_sec = remaining_seconds(self._timer_start, self._run_duration, now)
			if self.remaining_sec <= 0:
				self.stop()
				return
		self.tick.emit(self.display_seconds)

	def start(self):
		if self.running:
			return
		now = self._clock()
		self.start_time = now
		self.running = True
		if self.mode is Mode.TIMER:
			self._run_duration = self.timer_duration
			self._timer_start = now
			self.remaining_sec = self._run_duration
			self._resume.save_run(self.mode, now, self._run_duration)
		else:
			self.elapsed_sec = 0
			self._resume.save_run(self.mode, now)
		self._arm()
		self.state_changed.emit('running')
		self.tick.emit(self.display_seconds)

	def stop(self):
		"""Close the running interval into a Session. No-op when nothing is running."""
		if self.start_time is None:
			return None
		end = max(self._clock(), self.start_time)
		if self.mode is Mode.TIMER:
			expiry = self._timer_start + self._run_duration * 1000
			end = max(self.start_time, min(end, expiry))
		session = Session.close(self.start_time, end, self.mode)
		self._disarm()
		self._sessions.append(session)
		self._resume.clear_run()
		self._to_idle()
		logger.info("Recorded %s session of %ss on %s", session.mode.value, session.duration, session.date)
		self.session_recorded.emit(session)
		self.state_changed.emit('idle')
		self.tick.emit(self.display_seconds)
		return session

	def reset(self):
		"""Drop the running interval without recording it."""
		self._disarm()
		self._resume.clear_run()
		self._to_idle()
		self.state_changed.emit('idle')
		self.tick.emit(self.display_seconds)

	def switch_mode(self, mode):
		mode = Mode(mode)
		if self.running:
			self.stop()
		self.mode = mode
		self._resume.save_mode(mode)
		self.elapsed_sec = 0
		self.remaining_sec = self.timer_duration
		self.mode_changed.emit(mode.value)
		self.tick.emit(self.display_seconds)

	def set_timer_minutes(self, text) -> int:
		"""Set the countdown length from user input; unusable input falls back to the default."""
		match = LEADING_INT.match(str(text))
		minutes = int(match.group(1)) if match else 0
		if minutes <= 0:
			minutes = self.default_minutes
		self.timer_duration = minutes * 60
		if not self.running:
			self.remaining_sec = self.timer_duration
			if self.mode is Mode.TIMER:
				self.tick.emit(self.display_seconds)
		return self.timer_duration

	def live_session(self, now=None):
		"""The in-flight interval as an open Session, for display only."""
		if not self.running or self.start_time is None:
			return None
		now = self._clock() if now is None else now
		return Session(
			start_time=self.start_time,
			duration=elapsed_seconds(self.start_time, now),
			mode=self.mode,
			date=local_date_str(self.start_time),
		)

	def shutdown(self):
		"""Stop ticking but keep the persisted run so the next launch resumes it."""
		self._disarm()

	def _to_idle(self):
		self.running = False
		self.start_time = None
		self._timer_start = None
		self.elapsed_sec = 0
		self.remaining_sec = self.timer_duration
