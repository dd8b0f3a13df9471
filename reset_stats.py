"""
Reset all time tracker stats by clearing the local session archive.
This will delete all session history and any timer that is still running.
"""

from BackEnd.core.settings import get_settings
from BackEnd.repos.local_store import LocalStorage
from BackEnd.repos.resume_store import ResumptionStore
from BackEnd.repos.session_store import SessionStore

def reset_all_stats(storage, ask=input):
    """Clear archived sessions and resumption state after confirmation. Returns True if cleared."""
    sessions = SessionStore(storage)
    if len(sessions) == 0 and not storage.keys():
        print("No tracked sessions found. Stats are already at 0.")
        return False

    print(f"Found {len(sessions)} tracked sessions.")
    confirm = ask("Are you sure you want to reset all stats? This cannot be undone. (yes/no): ")
    if confirm.strip().lower() not in ['yes', 'y']:
        print("Reset cancelled.")
        return False

    sessions.clear()
    ResumptionStore(storage).clear()
    print("✓ Session history deleted")
    print("✓ All stats have been reset to 0")
    print("\nThe remote copy is untouched; push from the Analytics page to clear it too.")
    return True

if __name__ == "__main__":
    print("=" * 50)
    print("Time Tracker - Reset All Stats")
    print("=" * 50)
    with LocalStorage(get_settings().local_db_path) as storage:
        reset_all_stats(storage)
    print("\nPress Enter to exit...")
    input()
