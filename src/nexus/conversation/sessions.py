"""In-memory conversation sessions with a bounded rolling history."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Literal

logger = logging.getLogger(__name__)

Role = Literal["user", "assistant"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ConversationTurn:
    """A single message in a session. Immutable once created."""

    role: Role
    content: str
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ConversationSession:
    """Rolling conversation context for one session id."""

    session_id: str
    history: list[ConversationTurn] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    last_updated: datetime = field(default_factory=_utcnow)


class SessionStore:
    """Process-local mapping from session id to conversation session.

    Sessions are not persisted and are lost on restart. Mutations are
    serialized per session id so turns keep their arrival order even when
    requests for the same session overlap at an await point.
    """

    def __init__(self, max_turns: int = 10, idle_timeout: timedelta | None = None):
        """Initialize the store.

        Args:
            max_turns: Turns kept per session; the oldest are dropped first
            idle_timeout: Evict sessions untouched for longer than this when
                a new session starts (None keeps sessions until ended)
        """
        if max_turns < 1:
            raise ValueError("max_turns must be positive")
        self.max_turns = max_turns
        self.idle_timeout = idle_timeout
        self._sessions: dict[str, ConversationSession] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def _lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        return lock

    def start_session(self, session_id: str | None = None) -> ConversationSession:
        """Create a new session with an empty history.

        Args:
            session_id: Optional explicit id (a random token is generated otherwise)

        Returns:
            The new session
        """
        if self.idle_timeout is not None:
            self.evict_idle()

        now = _utcnow()
        session = ConversationSession(
            session_id=session_id or uuid.uuid4().hex, created_at=now, last_updated=now
        )
        self._sessions[session.session_id] = session
        logger.debug("Started session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> ConversationSession | None:
        return self._sessions.get(session_id)

    def get_context(self, session_id: str) -> list[ConversationTurn]:
        """Return a copy of the session history, or an empty list for unknown ids."""
        session = self._sessions.get(session_id)
        if session is None:
            return []
        return list(session.history)

    async def append_turn(
        self, session_id: str, user_text: str, assistant_text: str
    ) -> ConversationSession:
        """Append a user turn and an assistant turn, creating the session if needed.

        The history is trimmed to the most recent ``max_turns`` turns.
        """
        async with self._lock_for(session_id):
            session = self._sessions.get(session_id)
            if session is None:
                session = self.start_session(session_id)

            session.history.append(ConversationTurn(role="user", content=user_text))
            session.history.append(ConversationTurn(role="assistant", content=assistant_text))
            if len(session.history) > self.max_turns:
                del session.history[: len(session.history) - self.max_turns]
            session.last_updated = _utcnow()
            return session

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        self._locks.pop(session_id, None)
        if session is None:
            return False
        logger.debug("Ended session %s", session_id)
        return True

    def evict_idle(self, now: datetime | None = None) -> int:
        """Drop sessions idle for longer than ``idle_timeout``.

        Returns:
            Number of sessions evicted
        """
        if self.idle_timeout is None:
            return 0
        cutoff = (now or _utcnow()) - self.idle_timeout
        stale = [sid for sid, s in self._sessions.items() if s.last_updated < cutoff]
        for sid in stale:
            self.end_session(sid)
        if stale:
            logger.info("Evicted %d idle sessions", len(stale))
        return len(stale)
