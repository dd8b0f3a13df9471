"""Aggregations over the session list: ranges, day buckets, today's timeline.

Every function here is pure; none of them mutates the sessions it is given.
"""

import calendar
import datetime
from typing import Iterable

from BackEnd.core.clock import fmt_hms, local_midnight, local_today_str, now_ms, to_ms
from BackEnd.models.session import DayData, Session, TimeRange, TimelineSlot


def _shift_months(dt: datetime.datetime, months: int) -> datetime.datetime:
	"""Calendar month arithmetic; the day is clamped to the target month's length."""
	index = dt.year * 12 + (dt.month - 1) + months
	year, month = divmod(index, 12)
	month += 1
	day = min(dt.day, calendar.monthrange(year, month)[1])
	return dt.replace(year=year, month=month, day=day)


def range_start(time_range, now: int) -> int:
	"""Epoch-ms boundary of a rolling range, measured back from local midnight of `now`."""
	time_range = TimeRange(time_range)
	today = local_midnight(now)
	if time_range is TimeRange.TODAY:
		start = today
	elif time_range is TimeRange.WEEK:
		start = today - datetime.timedelta(days=7)
	elif time_range is TimeRange.MONTH:
		start = _shift_months(today, -1)
	else:
		start = _shift_months(today, -12)
	return to_ms(start)


def filter_by_range(sessions: Iterable[Session], time_range, now: int) -> list[Session]:
	boundary = range_start(time_range, now)
	return [s for s in sessions if s.start_time >= boundary]


def group_by_day(sessions: Iterable[Session]) -> list[DayData]:
	"""Bucket sessions by their `date`, oldest day first."""
	buckets: dict[str, DayData] = {}
	for session in sessions:
		day = buckets.get(session.date)
		if day is None:
			day = buckets[session.date] = DayData(date=session.date)
		day.total_minutes += session.duration / 60
		day.sessions.append(session)
	return [buckets[d] for d in sorted(buckets)]


def hour_label(hour: int) -> str:
	if hour == 0:
		return "12 AM"
	if hour == 12:
		return "12 PM"
	return f"{hour} AM" if hour < 12 else f"{hour - 12} PM"


def build_today_timeline(sessions: Iterable[Session], running_session: Session | None = None, now: int | None = None) -> list[TimelineSlot]:
	"""Occupancy of each hour of the local day containing `now`.

	Overlapping sessions are summed as-is, not merged, so a double-booked hour
	can reach the 60 minute cap early.
	"""
	if now is None:
		now = now_ms()
	intervals = [(s.start_time, s.end_time) for s in sessions if s.end_time is not None]
	if running_session is not None:
		intervals.append((running_session.start_time, max(now, running_session.start_time)))

	midnight = local_midnight(now)
	slots = []
	for hour in range(24):
		slot_start = to_ms(midnight.replace(hour=hour))
		if hour < 23:
			slot_end = to_ms(midnight.replace(hour=hour + 1))
		else:
			slot_end = to_ms(midnight + datetime.timedelta(days=1))
		worked_ms = 0
		for start, end in intervals:
			worked_ms += max(0, min(end, slot_end) - max(start, slot_start))
		worked_minutes = min(60.0, max(0.0, worked_ms / 60000))
		slots.append(TimelineSlot(hour=hour, label=hour_label(hour), worked_minutes=worked_minutes))
	return slots


def daily_total(sessions: Iterable[Session], day: str) -> str:
	return fmt_hms(sum(s.duration for s in sessions if s.date == day))


def today_sessions(sessions: Iterable[Session], now: int | None = None) -> list[Session]:
	"""Sessions dated today, newest first."""
	today = local_today_str(now)
	return sorted((s for s in sessions if s.date == today), key=lambda s: s.start_time, reverse=True)


def chart_points(days: Iterable[DayData]) -> list[tuple[str, float]]:
	"""(label, hours) pairs for the bar chart, e.g. ("Jan 5", 1.5)."""
	points = []
	for day in days:
		d = datetime.date.fromisoformat(day.date)
		points.append((f"{d:%b} {d.day}", day.hours))
	return points


def daily_streak(sessions: Iterable[Session], today: str) -> int:
	"""
	Count consecutive days with tracked time, ending today.
	Returns 0 if nothing was tracked today.
	"""
	dates = {datetime.date.fromisoformat(s.date) for s in sessions if s.duration > 0}
	current = datetime.date.fromisoformat(today)
	streak = 0
	while current in dates:
		streak += 1
		current -= datetime.timedelta(days=1)
	return streak


def days_tracked(sessions: Iterable[Session]) -> int:
	return len({s.date for s in sessions if s.duration > 0})


def total_hours(sessions: Iterable[Session]) -> float:
	return sum(s.duration for s in sessions) / 3600.0
