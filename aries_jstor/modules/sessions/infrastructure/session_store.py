"""In-memory session store."""

import threading

from aries_jstor.modules.sessions.domain.entities import Session, UpstreamSystem
from aries_jstor.modules.sessions.domain.repository import SessionStore


class InMemorySessionStore(SessionStore):
    """Process-wide session store shared by all in-flight requests.

    A replace always overwrites the whole cookie set, so two concurrent
    refreshes only cost a redundant login.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[UpstreamSystem, Session] = {}

    def get(self, system: UpstreamSystem) -> Session:
        with self._lock:
            return self._sessions.get(system) or Session.empty(system)

    def replace(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.system] = session
