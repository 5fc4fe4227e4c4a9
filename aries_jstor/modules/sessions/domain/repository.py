"""Session store and authenticator ports."""

from abc import ABC, abstractmethod
from typing import Protocol

from aries_jstor.modules.sessions.domain.entities import Session, UpstreamSystem


class SessionStore(ABC):
    """Holds the current session of each upstream system.

    There is no expiry tracking; a stale session is only noticed when an
    upstream answers 401/403.
    """

    @abstractmethod
    def get(self, system: UpstreamSystem) -> Session:
        """Return the current session, empty when none was stored yet."""
        pass

    @abstractmethod
    def replace(self, session: Session) -> None:
        """Overwrite the stored session of ``session.system``."""
        pass


class Authenticator(Protocol):
    """Port for (re-)establishing an upstream session."""

    async def login(self, system: UpstreamSystem) -> Session: ...
