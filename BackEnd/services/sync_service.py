"""Bulk sync of the session archive against the sessions API."""

import logging
from typing import Iterable

import requests
from pydantic import ValidationError
from PySide6.QtCore import QObject, Signal

from BackEnd.models.session import Session, SessionList
from BackEnd.repos.session_store import SessionStore

logger = logging.getLogger(__name__)


class SyncError(RuntimeError):
	"""Raised when the sessions API cannot be read or written."""


class SessionsClient:
	"""HTTP client for GET/POST /sessions. Every failure surfaces as SyncError."""

	def __init__(self, base_url: str, *, timeout: float = 10.0, http=None):
		self._base_url = base_url.rstrip("/")
		self._timeout = timeout
		self._http = http or requests.Session()

	def list_all(self) -> list[Session]:
		payload = self._json(self._request("get", "/sessions"))
		if not isinstance(payload, list):
			raise SyncError("GET /sessions did not return a list")
		try:
			return SessionList.validate_python(payload)
		except ValidationError as exc:
			raise SyncError(f"GET /sessions returned invalid sessions: {exc}") from exc

	def replace_all(self, sessions: Iterable[Session]) -> int:
		body = [s.to_json() for s in sessions]
		payload = self._json(self._request("post", "/sessions", json=body))
		if not isinstance(payload, dict) or not payload.get("success"):
			raise SyncError(f"POST /sessions was not acknowledged: {payload!r}")
		return int(payload.get("count", len(body)))

	def close(self) -> None:
		self._http.close()

	def _request(self, method: str, path: str, **kwargs):
		url = f"{self._base_url}{path}"
		try:
			response = getattr(self._http, method)(url, timeout=self._timeout, **kwargs)
		except requests.RequestException as exc:
			raise SyncError(f"{method.upper()} {path} failed: {exc}") from exc
		if response.status_code >= 400:
			raise SyncError(
				f"{method.upper()} {path} failed with {response.status_code}: {self._error_message(response)}"
			)
		return response

	@staticmethod
	def _json(response):
		try:
			return response.json()
		except ValueError as exc:
			raise SyncError(f"response is not JSON: {exc}") from exc

	@staticmethod
	def _error_message(response) -> str:
		try:
			body = response.json()
		except ValueError:
			return response.text
		if isinstance(body, dict) and "error" in body:
			return str(body["error"])
		return str(body)


class SyncService(QObject):
	"""Runs explicit push/pull actions; a failed sync never touches local data."""

	synced = Signal(str, int)  # direction ('push'/'pull'), session count
	sync_failed = Signal(str)

	def __init__(self, client: SessionsClient, store: SessionStore, parent=None):
		super().__init__(parent)
		self._client = client
		self._store = store

	def push(self) -> bool:
		"""Replace the remote collection with the local archive."""
		try:
			count = self._client.replace_all(self._store.sessions)
		except SyncError as exc:
			logger.warning("Push failed: %s", exc)
			self.sync_failed.emit(str(exc))
			return False
		logger.info("Pushed %d sessions", count)
		self.synced.emit('push', count)
		return True

	def pull(self) -> bool:
		"""Replace the local archive with the remote collection.

		Sessions recorded locally while the fetch is in flight are kept.
		"""
		baseline = self._store.sessions
		try:
			remote = self._client.list_all()
		except SyncError as exc:
			logger.warning("Pull failed: %s", exc)
			self.sync_failed.emit(str(exc))
			return False
		closed = [s for s in remote if s.is_closed]
		if len(closed) != len(remote):
			logger.warning("Skipped %d open sessions from the remote store", len(remote) - len(closed))
		kept = self._store.rebase(closed, baseline)
		if kept:
			logger.info("Kept %d sessions recorded during the pull", len(kept))
		logger.info("Pulled %d sessions", len(closed))
		self.synced.emit('pull', len(closed))
		return True
