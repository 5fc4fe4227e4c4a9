"""Upstream session domain models."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class UpstreamSystem(str, Enum):
    """Upstream systems that require a cookie session."""

    CATALOG = "catalog"  # JSTOR Forum admin API
    PUBLIC = "public"  # Artstor public discovery API


@dataclass(frozen=True)
class Credentials:
    """Catalog account credentials."""

    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***')"


@dataclass(frozen=True)
class Session:
    """Cookie set captured from a login response."""

    system: UpstreamSystem
    cookies: dict[str, str] = field(default_factory=dict)
    obtained_at: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return not self.cookies

    @classmethod
    def empty(cls, system: UpstreamSystem) -> "Session":
        return cls(system=system)

    @classmethod
    def from_cookies(cls, system: UpstreamSystem, cookies: dict[str, str]) -> "Session":
        return cls(
            system=system,
            cookies=dict(cookies),
            obtained_at=datetime.now(UTC),
        )
