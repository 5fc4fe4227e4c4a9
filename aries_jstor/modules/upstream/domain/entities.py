"""Upstream call result models."""

from dataclasses import dataclass
from enum import Enum

from aries_jstor.modules.upstream.domain.exceptions import (
    TransportError,
    UpstreamRejection,
)


class CallStatus(str, Enum):
    """上游调用状态枚举。"""

    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"
    REJECTED = "rejected"  # 非 2xx，或重新登录后仍 401/403


@dataclass(frozen=True)
class UpstreamResult:
    """Outcome of one upstream call, including its auth retry."""

    status: CallStatus
    url: str
    body: str = ""
    status_code: int | None = None
    error_message: str | None = None
    reauthenticated: bool = False

    @property
    def is_success(self) -> bool:
        return self.status == CallStatus.SUCCESS

    @classmethod
    def success(
        cls, url: str, body: str, status_code: int, reauthenticated: bool = False
    ) -> "UpstreamResult":
        return cls(
            status=CallStatus.SUCCESS,
            url=url,
            body=body,
            status_code=status_code,
            reauthenticated=reauthenticated,
        )

    @classmethod
    def transport_error(
        cls, url: str, error_message: str, reauthenticated: bool = False
    ) -> "UpstreamResult":
        return cls(
            status=CallStatus.TRANSPORT_ERROR,
            url=url,
            error_message=error_message,
            reauthenticated=reauthenticated,
        )

    @classmethod
    def rejected(
        cls, url: str, status_code: int, body: str, reauthenticated: bool = False
    ) -> "UpstreamResult":
        return cls(
            status=CallStatus.REJECTED,
            url=url,
            body=body,
            status_code=status_code,
            error_message=f"HTTP {status_code}",
            reauthenticated=reauthenticated,
        )

    def unwrap(self) -> str:
        """Return the body of a successful call, raise otherwise."""
        if self.status == CallStatus.SUCCESS:
            return self.body
        if self.status == CallStatus.REJECTED:
            raise UpstreamRejection(self.url, self.status_code or 0, self.body)
        raise TransportError(self.url, self.error_message or "unknown error")
