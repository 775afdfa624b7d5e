"""
In-memory registry of card sessions.

Each session id maps to exactly one CardSession, and so to one live card.
Sessions are not persisted; a restart discards them.
"""

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from threading import Lock

from songbingo.config import settings
from songbingo.models.failure import FailureKind, KnownError
from songbingo.services.card_session import CardSession

logger = logging.getLogger(__name__)


class SessionNotFoundError(KnownError):
    """Raised when a session id is unknown or has been evicted."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="This bingo session has expired.",
            detail=f"session {session_id} not found",
            suggestion="Start a new session and generate a new card.",
            status_code=404,
        )


@dataclass
class SessionRegistry:
    """
    Thread-safe map of session id to CardSession.

    Keeps at most `max_sessions`; the least recently used session is
    evicted first.
    """

    max_sessions: int = field(default_factory=lambda: settings.max_sessions)
    _sessions: "OrderedDict[str, CardSession]" = field(default_factory=OrderedDict)
    _lock: Lock = field(default_factory=Lock)

    def create(self) -> CardSession:
        session = CardSession(uuid.uuid4().hex)
        with self._lock:
            self._sessions[session.session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("SESSION_EVICTED", extra={"session_id": evicted})
        return session

    def get(self, session_id: str) -> CardSession:
        """
        Look up a session and mark it recently used.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            self._sessions.move_to_end(session_id)
            return session

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


session_registry = SessionRegistry()
