"""Service for cleanup operations."""
import logging
import threading
import time
from datetime import timedelta

from api.config import SESSION_CLEANUP_INTERVAL_SECONDS, SESSION_TTL_MINUTES
from api.services import import_service


def cleanup_idle_sessions() -> int:
    """Remove import sessions older than the configured lifetime."""
    if SESSION_TTL_MINUTES <= 0:
        return 0

    logger = logging.getLogger(__name__)
    try:
        expired = import_service.expire_idle_sessions(
            timedelta(minutes=SESSION_TTL_MINUTES)
        )
    except Exception as e:
        logger.error(f"Failed to cleanup import sessions: {e}")
        return 0
    if expired > 0:
        logger.info(f"Cleaned up {expired} idle import sessions")
    return expired


def schedule_session_cleanup() -> threading.Thread:
    """Schedule periodic cleanup of idle import sessions."""

    def _worker() -> None:
        while True:
            time.sleep(SESSION_CLEANUP_INTERVAL_SECONDS)
            cleanup_idle_sessions()

    thread = threading.Thread(
        target=_worker,
        name="import_sessions_cleanup",
        daemon=True,
    )
    thread.start()
    return thread
