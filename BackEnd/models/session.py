"""Session records shared by the tracker, the local archive and the sync API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from BackEnd.core.clock import local_date_str


class Mode(str, Enum):
	STOPWATCH = "stopwatch"
	TIMER = "timer"


class TimeRange(str, Enum):
	TODAY = "today"
	WEEK = "week"
	MONTH = "month"
	YEAR = "year"


class Session(BaseModel):
	"""One tracked work interval. Closed once `end_time` is set."""

	model_config = ConfigDict(populate_by_name=True, frozen=True)

	start_time: int = Field(..., alias="startTime", ge=0)
	end_time: int | None = Field(default=None, alias="endTime")
	duration: int = Field(..., ge=0)
	mode: Mode
	date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")

	@model_validator(mode="after")
	def _check_interval(self) -> "Session":
		if self.end_time is not None and self.end_time < self.start_time:
			raise ValueError("endTime must not be earlier than startTime")
		return self

	@classmethod
	def close(cls, start_time: int, end_time: int, mode: Mode) -> "Session":
		"""Build a closed session; duration and date derive from the interval."""
		return cls(
			start_time=start_time,
			end_time=end_time,
			duration=(end_time - start_time) // 1000,
			mode=mode,
			date=local_date_str(start_time),
		)

	@property
	def is_closed(self) -> bool:
		return self.end_time is not None

	def to_json(self) -> dict[str, Any]:
		return self.model_dump(mode="json", by_alias=True, exclude_none=True)


SessionList = TypeAdapter(list[Session])


@dataclass(slots=True)
class DayData:
	date: str
	total_minutes: float = 0.0
	sessions: list[Session] = field(default_factory=list)

	@property
	def hours(self) -> float:
		return round(self.total_minutes / 60, 1)


@dataclass(slots=True)
class TimelineSlot:
	hour: int
	label: str
	worked_minutes: float

	@property
	def worked_percentage(self) -> float:
		return self.worked_minutes / 60 * 100


@dataclass(slots=True)
class TrackerState:
	mode: Mode
	is_running: bool
	start_time: int | None
	elapsed_sec: int
	remaining_sec: int
	timer_duration: int

	@property
	def display_seconds(self) -> int:
		return self.elapsed_sec if self.mode is Mode.STOPWATCH else self.remaining_sec


__all__ = ["DayData", "Mode", "Session", "SessionList", "TimeRange", "TimelineSlot", "TrackerState"]
