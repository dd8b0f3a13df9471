"""Durable key/value storage for one tracker installation.

Plays the part a browser's local storage plays for a web client: a flat map of
string keys to string values, kept in a small SQLite file in the user data dir.
"""

import sqlite3
import threading
from pathlib import Path

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
	key TEXT PRIMARY KEY,
	value TEXT NOT NULL
);
"""


class LocalStorage:
	"""Explicit handle over the key/value file: open on startup, close on shutdown."""

	def __init__(self, path):
		self._path = str(path)
		self._conn: sqlite3.Connection | None = None
		self._lock = threading.Lock()

	def open(self):
		if self._conn is None:
			if self._path != ":memory:":
				Path(self._path).parent.mkdir(parents=True, exist_ok=True)
			conn = sqlite3.connect(self._path, check_same_thread=False)
			conn.executescript(SCHEMA)
			self._conn = conn
		return self

	def close(self):
		if self._conn is not None:
			self._conn.close()
			self._conn = None

	def __enter__(self):
		return self.open()

	def __exit__(self, *exc):
		self.close()

	@property
	def is_open(self) -> bool:
		return self._conn is not None

	def _require(self) -> sqlite3.Connection:
		if self._conn is None:
			raise RuntimeError("local storage is not open")
		return self._conn

	def get(self, key: str) -> str | None:
		conn = self._require()
		with self._lock:
			row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
		return row[0] if row else None

	def set(self, key: str, value: str) -> None:
		conn = self._require()
		with self._lock, conn:
			conn.execute(
				"INSERT INTO kv (key, value) VALUES (?, ?) "
				"ON CONFLICT(key) DO UPDATE SET value=excluded.value",
				(key, value),
			)

	def remove(self, *keys: str) -> None:
		conn = self._require()
		with self._lock, conn:
			conn.executemany("DELETE FROM kv WHERE key=?", [(k,) for k in keys])

	def keys(self) -> list[str]:
		conn = self._require()
		with self._lock:
			return [r[0] for r in conn.execute("SELECT key FROM kv ORDER BY key")]

	def clear(self) -> None:
		conn = self._require()
		with self._lock, conn:
			conn.execute("DELETE FROM kv")
