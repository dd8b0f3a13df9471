import os
from pathlib import Path

def user_data_dir(app_name="TimeTracker"):
	"""Return per-user data dir (Windows/macOS/Linux)."""
	if os.name == "nt":
		base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
	elif os.name == "posix":
		base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
	else:
		base = os.path.expanduser("~")
	path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path

def local_store_path(data_dir=None):
	"""Return Path to tracker.db (timer state and session archive)."""
	return Path(data_dir or user_data_dir()) / "tracker.db"

def server_db_path(data_dir=None):
	"""Return Path to the sync API database."""
	return Path(data_dir or user_data_dir()) / "sessions-api.db"
