import logging
from datetime import UTC, datetime, timedelta

from wizmatik.gallery import GalleryController
from wizmatik.logger import logger as event_logger

logger = logging.getLogger(__name__)


class GallerySessionStore:
    """In-memory gallery sessions keyed by session id.

    A session lives as long as its page is open: it is closed explicitly when the
    browser navigates away, and expires after ``ttl_seconds`` without activity
    otherwise.
    """

    def __init__(self, ttl_seconds: int = 1800):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._sessions: dict[str, dict[str, GalleryController | datetime]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return self.get(session_id) is not None

    def add(self, controller: GalleryController) -> str:
        """Register a controller and return its session id"""
        self.sweep()
        self._sessions[controller.session_id] = {"controller": controller, "expires_at": datetime.now(UTC) + self.ttl}
        event_logger.log_event("gallery_session_opened", session_id=controller.session_id, open_sessions=len(self._sessions))
        return controller.session_id

    def get(self, session_id: str) -> GalleryController | None:
        """Get a live session and extend its expiry"""
        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        expires_at = entry["expires_at"]
        if isinstance(expires_at, datetime) and expires_at > datetime.now(UTC):
            entry["expires_at"] = datetime.now(UTC) + self.ttl
            controller = entry["controller"]
            return controller if isinstance(controller, GalleryController) else None

        del self._sessions[session_id]
        logger.info(f"Gallery session {session_id} expired")
        return None

    def close(self, session_id: str) -> bool:
        if session_id not in self._sessions:
            return False
        del self._sessions[session_id]
        event_logger.log_event("gallery_session_closed", session_id=session_id, open_sessions=len(self._sessions))
        return True

    def sweep(self) -> int:
        """Drop expired sessions and return how many were removed"""
        now = datetime.now(UTC)
        expired = [sid for sid, entry in self._sessions.items() if isinstance(entry["expires_at"], datetime) and entry["expires_at"] <= now]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Swept {len(expired)} expired gallery sessions")
        return len(expired)
