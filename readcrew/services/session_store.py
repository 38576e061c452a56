"""
Session Store abstraction.

Holds per-conversation chat state keyed by the client-supplied session id.
Implementations: in-memory (single process, default). Anything exposing the
same get / get_or_create / upsert / sweep surface (e.g. a Redis-backed store)
can be swapped in without touching the conversation engine.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Protocol

from .fallback import utcnow

logger = logging.getLogger(__name__)

DEFAULT_RETENTION = timedelta(hours=2)


@dataclass
class Session:
    session_id: str
    created_at: datetime
    messages: List[Dict[str, str]] = field(default_factory=list)  # {role, content}, oldest first
    exchange_count: int = 0
    has_recommended: bool = False

    def add(self, role: str, content: str) -> None:
        """Append a message to the conversation history."""
        self.messages.append({"role": role, "content": content})

    def recent_history(self, limit: int) -> List[Dict[str, str]]:
        """Return the last N messages, oldest first."""
        return [dict(m) for m in self.messages[-limit:]]


class SessionStore(Protocol):
    """Protocol for chat session storage."""

    def get(self, session_id: str) -> Optional[Session]:
        """Return the session if it exists, else None."""
        ...

    def get_or_create(self, session_id: str) -> Session:
        """Return the existing session, creating an empty one on first reference."""
        ...

    def upsert(self, session: Session) -> None:
        """Write the session back (no-op for stores that hand out live references)."""
        ...

    def sweep(self, now: Optional[datetime] = None) -> None:
        """Drop every session older than the retention window."""
        ...


class InMemorySessionStore:
    """
    Session store backed by a dict. Lost on restart; not shared across processes.

    No locking: all access happens on the event loop, and sweep never runs in
    the middle of a turn's synchronous mutation.
    """

    def __init__(self, retention: timedelta = DEFAULT_RETENTION, clock: Callable[[], datetime] = utcnow):
        self.retention = retention
        self._clock = clock
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            session = Session(session_id=session_id, created_at=self._clock())
            self._sessions[session_id] = session
        return session

    def upsert(self, session: Session) -> None:
        self._sessions[session.session_id] = session

    def sweep(self, now: Optional[datetime] = None) -> None:
        cutoff = (now or self._clock()) - self.retention
        expired = [sid for sid, s in self._sessions.items() if s.created_at < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("[sweep] removed %d expired sessions, %d remain", len(expired), len(self._sessions))
