import sqlite3
import threading
from pathlib import Path
from typing import Iterable

from BackEnd.models.session import Session

SCHEMA_PATH = Path(__file__).parent.parent.parent / "SQL" / "schema.sql"


class SessionRepo:
	"""SQLite store behind the sessions API. Holds one connection between open() and close()."""

	def __init__(self, db_file):
		self._db_file = str(db_file)
		self._conn: sqlite3.Connection | None = None
		self._lock = threading.Lock()

	def open(self):
		"""Open SQLite connection and ensure schema is applied."""
		if self._conn is not None:
			return self
		if self._db_file != ":memory:":
			Path(self._db_file).parent.mkdir(parents=True, exist_ok=True)
		conn = sqlite3.connect(self._db_file, check_same_thread=False)
		conn.row_factory = sqlite3.Row
		with open(SCHEMA_PATH, encoding="utf-8") as f:
			conn.executescript(f.read())
		self._conn = conn
		return self

	def close(self):
		if self._conn is not None:
			self._conn.close()
			self._conn = None

	def _require(self) -> sqlite3.Connection:
		if self._conn is None:
			raise RuntimeError("session repository is not open")
		return self._conn

	def list_all(self) -> list[Session]:
		"""Every stored session, oldest start first."""
		conn = self._require()
		with self._lock:
			cur = conn.execute(
				"SELECT start_time, end_time, duration, mode, date FROM sessions ORDER BY start_time, id"
			)
			rows = cur.fetchall()
		return [Session.model_validate(dict(row)) for row in rows]

	def replace_all(self, sessions: Iterable[Session]) -> int:
		"""Delete every row and insert `sessions` in one transaction. Returns the new count."""
		rows = [(s.start_time, s.end_time, s.duration, s.mode.value, s.date) for s in sessions]
		conn = self._require()
		with self._lock, conn:
			conn.execute("DELETE FROM sessions")
			conn.executemany(
				"INSERT INTO sessions (start_time, end_time, duration, mode, date) VALUES (?, ?, ?, ?, ?)",
				rows,
			)
		return len(rows)

	def count(self) -> int:
		conn = self._require()
		with self._lock:
			row = conn.execute("SELECT COUNT(*) AS total FROM sessions").fetchone()
		return row["total"] if row else 0
