"""Versioned schemas for state persisted in local storage."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from BackEnd.models.session import Mode, Session

RESUME_VERSION = "1"
ARCHIVE_VERSION = 1


class ResumptionState(BaseModel):
	"""Minimal fields needed to rebuild a running tracker after a restart."""

	mode: Mode = Mode.STOPWATCH
	start_time: int | None = Field(default=None, ge=0)
	timer_start_time: int | None = Field(default=None, ge=0)
	timer_duration: int | None = Field(default=None, gt=0)

	@model_validator(mode="after")
	def _check_timer_run(self) -> "ResumptionState":
		if self.running and self.mode is Mode.TIMER and self.timer_duration is None:
			raise ValueError("timer run persisted without a duration")
		return self

	@property
	def running(self) -> bool:
		return self.start_time is not None


class SessionArchive(BaseModel):
	"""Envelope for the archived session list."""

	version: Literal[1] = ARCHIVE_VERSION
	sessions: list[Session] = Field(default_factory=list)


__all__ = ["ARCHIVE_VERSION", "RESUME_VERSION", "ResumptionState", "SessionArchive"]
