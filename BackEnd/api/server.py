"""Sessions API: the remote snapshot the tracker pushes to and pulls from."""

import logging
import sqlite3
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from BackEnd.core.logs import configure_logging
from BackEnd.core.settings import APP_VERSION, TrackerSettings, get_settings
from BackEnd.models.session import SessionList
from BackEnd.repos.session_repo import SessionRepo

logger = logging.getLogger(__name__)


def create_app(settings: TrackerSettings | None = None, repo: SessionRepo | None = None) -> FastAPI:
	"""Build the API around a repository opened on startup and closed on shutdown."""

	if repo is None:
		settings = settings or get_settings()
		repo = SessionRepo(settings.server_db_path)

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		repo.open()
		logger.info("Sessions API ready with %d sessions", repo.count())
		try:
			yield
		finally:
			repo.close()

	app = FastAPI(title="Time Tracker Sessions API", version=APP_VERSION, lifespan=lifespan)
	app.state.repo = repo

	@app.exception_handler(sqlite3.Error)
	async def _storage_error(request: Request, exc: sqlite3.Error):
		logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
		return JSONResponse({"error": str(exc)}, status_code=500)

	@app.get("/sessions")
	def list_sessions():
		return [session.to_json() for session in repo.list_all()]

	@app.post("/sessions")
	async def replace_sessions(request: Request):
		try:
			payload = await request.json()
			sessions = SessionList.validate_python(payload)
		except (ValueError, ValidationError) as exc:
			logger.warning("Rejected session upload: %s", exc)
			return JSONResponse({"error": str(exc)}, status_code=500)
		count = repo.replace_all(sessions)
		logger.info("Replaced stored sessions with %d uploaded", count)
		return {"success": True, "count": count}

	return app


def main() -> None:
	"""Entry point for running the sessions API via CLI."""

	settings = get_settings()
	configure_logging(settings.log_level)
	logger.info(
		"Launching sessions API on %s:%d (db %s)",
		settings.api_host,
		settings.api_port,
		settings.server_db_path,
	)
	uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
	main()
