"""Login sessions of the chat server, identified by a cookie."""

import re
import time
from collections.abc import Callable
from dataclasses import dataclass

SESSION_ID = "im_sid"
SESSION_NAME = "im_name"
SESSION_CAPACITY = 1024
SESSION_TTL = 1800.0

_LEADING_INT = re.compile(r"\s*\+?(\d+)")


@dataclass
class Session:
    """One logged-in user."""

    id: int
    name: str
    created: float
    last_used: float


def parse_cookie(header: str, name: str) -> str | None:
    """Return the value of cookie name in a Cookie header, or None."""
    for part in re.split(r"[;,]", header):
        key, sep, value = part.strip().partition("=")
        if sep and key.strip() == name:
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            return value
    return None


def _session_id(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class SessionTable:
    """A bounded set of sessions that expire after ttl seconds without use."""

    def __init__(
        self,
        capacity: int = SESSION_CAPACITY,
        ttl: float = SESSION_TTL,
        clock: Callable[[], float] = time.time,
    ):
        self.capacity = capacity
        self.ttl = ttl
        self._clock = clock
        self._sessions: dict[int, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def is_login(self, cookie_header: str | None) -> bool:
        """Tell whether the cookie header names a live session."""
        return self.get_session(cookie_header) is not None

    def get_session(self, cookie_header: str | None) -> Session | None:
        """Find the session named by the cookie header and mark it as used."""
        if cookie_header is None:
            return None
        value = parse_cookie(cookie_header, SESSION_ID)
        if value is None:
            return None
        session = self._sessions.get(_session_id(value))
        if session is not None:
            session.last_used = self._clock()
        return session

    def create_session(self, name: str) -> Session:
        """Open a session for name; raise RuntimeError when the table is full."""
        if len(self._sessions) >= self.capacity:
            raise RuntimeError("session table is full")
        now = self._clock()
        sid = max(int(now * 1_000_000), 1)
        while sid in self._sessions:
            sid += 1
        session = Session(id=sid, name=name, created=now, last_used=now)
        self._sessions[sid] = session
        return session

    def destroy_session(self, session: Session) -> None:
        """Forget a session."""
        self._sessions.pop(session.id, None)

    def check_sessions(self) -> int:
        """Drop the sessions unused for longer than ttl; return how many."""
        threshold = self._clock() - self.ttl
        expired = [s for s in self._sessions.values() if s.last_used < threshold]
        for session in expired:
            self.destroy_session(session)
        return len(expired)