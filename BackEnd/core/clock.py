import time
from datetime import datetime


def now_ms() -> int:
	"""Return the current wall-clock time as epoch milliseconds."""
	return time.time_ns() // 1_000_000

def local_datetime(ms: int) -> datetime:
	"""Naive local datetime for an epoch-millisecond timestamp."""
	return datetime.fromtimestamp(ms / 1000)

def local_date_str(ms: int) -> str:
	"""Return the local calendar date of `ms` as YYYY-MM-DD."""
	return local_datetime(ms).date().isoformat()

def local_today_str(now: int | None = None) -> str:
	"""Return local date as YYYY-MM-DD string."""
	return local_date_str(now_ms() if now is None else now)

def local_midnight(ms: int) -> datetime:
	"""Local midnight of the day containing `ms`."""
	return datetime.combine(local_datetime(ms).date(), datetime.min.time())

def to_ms(dt: datetime) -> int:
	return int(dt.timestamp() * 1000)

def elapsed_seconds(start: int, now: int) -> int:
	"""Whole seconds between two epoch-ms stamps, never negative."""
	return max(0, (now - start) // 1000)

def remaining_seconds(start: int, target: int, now: int) -> int:
	"""Seconds left of a `target`-second countdown started at `start`."""
	return max(0, target - elapsed_seconds(start, now))

def fmt_hms(seconds: int) -> str:
	"""Format seconds as HH:MM:SS. Hours are not wrapped at 24."""
	h = seconds // 3600
	m = (seconds % 3600) // 60
	s = seconds % 60
	return f"{h:02}:{m:02}:{s:02}"
