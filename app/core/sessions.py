"""Server-side session store.

One instance lives on ``app.state.sessions`` for the lifetime of the
process. It starts empty and is flushed on shutdown, so a restart logs
everyone out.
"""

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from fastapi import Request

logger = logging.getLogger(__name__)

SESSION_ID_BYTES = 32


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    user_id: int
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionStore:
    def __init__(self, ttl: timedelta, clock: Callable[[], datetime] = _utcnow):
        self.ttl = ttl
        self._clock = clock
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> SessionRecord:
        now = self._clock()
        record = SessionRecord(
            session_id=secrets.token_urlsafe(SESSION_ID_BYTES),
            user_id=user_id,
            created_at=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            self._sessions[record.session_id] = record
        return record

    def resolve(self, session_id: str) -> Optional[int]:
        """Return the user id bound to an active session, or None."""
        with self._lock:
            record = self._sessions.get(session_id)
            if record is None:
                return None
            if record.is_expired(self._clock()):
                del self._sessions[session_id]
                return None
            return record.user_id

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [sid for sid, record in self._sessions.items() if record.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        logger.info("Session store flushed (%d sessions)", count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions
