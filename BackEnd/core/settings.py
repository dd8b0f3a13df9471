"""Configuration for the tracker client and the sessions API."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from BackEnd.core.paths import local_store_path, server_db_path, user_data_dir

APP_VERSION = "0.1.0"


class TrackerSettings(BaseSettings):
	"""Runtime configuration sourced from environment variables and optional .env file."""

	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

	data_dir: Path | None = Field(default=None, validation_alias="TRACKER_DATA_DIR")
	api_url: str = Field(default="http://127.0.0.1:8765", validation_alias="TRACKER_API_URL")
	api_timeout: float = Field(default=10.0, validation_alias="TRACKER_API_TIMEOUT")
	api_host: str = Field(default="127.0.0.1", validation_alias="TRACKER_API_HOST")
	api_port: int = Field(default=8765, validation_alias="TRACKER_API_PORT")
	server_db: Path | None = Field(default=None, validation_alias="TRACKER_SERVER_DB")
	default_timer_minutes: int = Field(default=25, validation_alias="TRACKER_DEFAULT_TIMER_MINUTES")
	log_level: str = Field(default="INFO", validation_alias="TRACKER_LOG_LEVEL")

	@field_validator("log_level")
	@classmethod
	def _normalize_log_level(cls, value: str) -> str:
		normalized = value.strip().upper()
		if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
			raise ValueError(
				"TRACKER_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
			)
		return normalized

	@field_validator("api_timeout")
	@classmethod
	def _validate_timeout(cls, value: float) -> float:
		if value <= 0:
			raise ValueError("TRACKER_API_TIMEOUT must be > 0")
		return value

	@field_validator("default_timer_minutes")
	@classmethod
	def _validate_timer_minutes(cls, value: int) -> int:
		if value < 1:
			raise ValueError("TRACKER_DEFAULT_TIMER_MINUTES must be >= 1")
		return value

	@property
	def local_db_path(self) -> Path:
		return local_store_path(self.data_dir)

	@property
	def server_db_path(self) -> Path:
		return self.server_db or server_db_path(self.data_dir)


@lru_cache(maxsize=1)
def get_settings() -> TrackerSettings:
	"""Return cached settings instance."""

	settings = TrackerSettings()
	data_dir = settings.data_dir.expanduser() if settings.data_dir else user_data_dir()
	data_dir.mkdir(parents=True, exist_ok=True)
	settings.data_dir = data_dir.resolve()
	if settings.server_db is not None:
		settings.server_db = settings.server_db.expanduser().resolve()
	return settings


__all__ = ["APP_VERSION", "TrackerSettings", "get_settings"]
