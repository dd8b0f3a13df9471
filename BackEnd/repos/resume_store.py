"""Resumption entries that let a running tracker survive a restart."""

import logging

from pydantic import ValidationError

from BackEnd.models.session import Mode
from BackEnd.models.state import RESUME_VERSION, ResumptionState
from BackEnd.repos.local_store import LocalStorage

logger = logging.getLogger(__name__)

VERSION_KEY = "resumeVersion"
# storage key -> ResumptionState field
KEYS = {
	"trackerMode": "mode",
	"startTime": "start_time",
	"timerStartTime": "timer_start_time",
	"timerDuration": "timer_duration",
}
RUN_KEYS = ("startTime", "timerStartTime")


class ResumptionStore:
	def __init__(self, storage: LocalStorage):
		self._storage = storage

	def load(self) -> ResumptionState:
		"""Read and validate the persisted entries; anything malformed reads as idle."""
		raw = {field: self._storage.get(key) for key, field in KEYS.items()}
		raw = {field: value for field, value in raw.items() if value is not None}
		version = self._storage.get(VERSION_KEY)
		if not raw:
			return ResumptionState()
		if version is not None and version != RESUME_VERSION:
			logger.warning("Discarding resumption state with unknown version %r", version)
			self.clear()
			return ResumptionState()
		try:
			state = ResumptionState.model_validate(raw)
		except ValidationError as exc:
			logger.warning("Discarding malformed resumption state: %s", exc)
			self.clear()
			return ResumptionState()
		if version is None:
			self._storage.set(VERSION_KEY, RESUME_VERSION)
		return state

	def save_run(self, mode: Mode, start_time: int, timer_duration: int | None = None) -> None:
		self._storage.set(VERSION_KEY, RESUME_VERSION)
		self._storage.set("trackerMode", mode.value)
		self._storage.set("startTime", str(start_time))
		if mode is Mode.TIMER:
			self._storage.set("timerStartTime", str(start_time))
			self._storage.set("timerDuration", str(timer_duration))
		else:
			self._storage.remove("timerStartTime")

	def save_mode(self, mode: Mode) -> None:
		self._storage.set(VERSION_KEY, RESUME_VERSION)
		self._storage.set("trackerMode", mode.value)

	def clear_run(self) -> None:
		"""Forget the running interval; mode and timer length stay as preferences."""
		self._storage.remove(*RUN_KEYS)

	def clear(self) -> None:
		self._storage.remove(VERSION_KEY, *KEYS)
