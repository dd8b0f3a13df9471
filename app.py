import sys
from PySide6.QtWidgets import QApplication
from BackEnd.core.logs import configure_logging
from BackEnd.core.scheduler import QtScheduler
from BackEnd.core.settings import get_settings
from BackEnd.repos.local_store import LocalStorage
from BackEnd.repos.resume_store import ResumptionStore
from BackEnd.repos.session_store import SessionStore
from BackEnd.services.sync_service import SessionsClient, SyncService
from BackEnd.services.tracker_service import TrackerController
from FrontEnd.ui_main import MainWindow

def main():
    settings = get_settings()
    configure_logging(settings.log_level)
    app = QApplication(sys.argv)
    storage = LocalStorage(settings.local_db_path).open()
    client = SessionsClient(settings.api_url, timeout=settings.api_timeout)
    try:
        sessions = SessionStore(storage)
        controller = TrackerController(
            sessions,
            ResumptionStore(storage),
            QtScheduler(app),
            default_minutes=settings.default_timer_minutes,
        )
        sync = SyncService(client, sessions)
        win = MainWindow(controller, sessions, sync)
        win.show()
        code = app.exec()
    finally:
        client.close()
        storage.close()
    sys.exit(code)

if __name__ == "__main__":
    main()
