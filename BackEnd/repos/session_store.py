"""Archive of closed sessions kept in local storage."""

import json
import logging
import threading
from typing import Iterable

from pydantic import ValidationError

from BackEnd.models.session import Session
from BackEnd.models.state import ARCHIVE_VERSION, SessionArchive
from BackEnd.repos.local_store import LocalStorage

logger = logging.getLogger(__name__)

ARCHIVE_KEY = "allSessions"


class SessionStore:
	"""Loads the archive once, then appends/replaces and writes it back whole."""

	def __init__(self, storage: LocalStorage):
		self._storage = storage
		# the GUI thread appends while a sync worker may be replacing
		self._lock = threading.RLock()
		self._sessions: list[Session] = self._load()

	@property
	def sessions(self) -> list[Session]:
		with self._lock:
			return list(self._sessions)

	def __len__(self):
		with self._lock:
			return len(self._sessions)

	def _load(self) -> list[Session]:
		raw = self._storage.get(ARCHIVE_KEY)
		if raw is None:
			return []
		try:
			document = json.loads(raw)
		except json.JSONDecodeError as exc:
			logger.warning("Ignoring unreadable session archive: %s", exc)
			return []
		if isinstance(document, list):
			# version-less archives were a bare array of sessions
			document = {"version": ARCHIVE_VERSION, "sessions": document}
		try:
			archive = SessionArchive.model_validate(document)
		except ValidationError as exc:
			logger.warning("Ignoring session archive that fails validation: %s", exc)
			return []
		closed = [s for s in archive.sessions if s.is_closed]
		if len(closed) != len(archive.sessions):
			logger.warning("Dropped %d open sessions from archive", len(archive.sessions) - len(closed))
		return closed

	def _write(self) -> None:
		archive = SessionArchive(sessions=self._sessions)
		payload = archive.model_dump(mode="json", by_alias=True, exclude_none=True)
		self._storage.set(ARCHIVE_KEY, json.dumps(payload))

	def append(self, session: Session) -> None:
		if not session.is_closed:
			raise ValueError("only closed sessions can be archived")
		with self._lock:
			self._sessions = [*self._sessions, session]
			self._write()

	def replace_all(self, sessions: Iterable[Session]) -> None:
		sessions = list(sessions)
		if any(not s.is_closed for s in sessions):
			raise ValueError("only closed sessions can be archived")
		with self._lock:
			self._sessions = sessions
			self._write()

	def rebase(self, sessions: Iterable[Session], baseline: Iterable[Session]) -> list[Session]:
		"""Replace the archive with `sessions`, keeping anything recorded since `baseline` was read.

		Returns the local sessions that were carried over.
		"""
		sessions = list(sessions)
		if any(not s.is_closed for s in sessions):
			raise ValueError("only closed sessions can be archived")
		seen = set(baseline)
		with self._lock:
			incoming = set(sessions)
			added = [s for s in self._sessions if s not in seen and s not in incoming]
			self._sessions = sessions + added
			self._write()
		return added

	def clear(self) -> None:
		with self._lock:
			self._sessions = []
			self._storage.remove(ARCHIVE_KEY)
