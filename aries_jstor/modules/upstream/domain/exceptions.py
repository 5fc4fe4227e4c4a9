"""Upstream call exceptions."""

from aries_jstor.core.domain.exceptions import UpstreamError


class TransportError(UpstreamError):
    """Raised on connection, DNS or timeout failures."""

    error_code = "UPSTREAM_UNAVAILABLE"

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Unable to reach {url}: {reason}")


class UpstreamRejection(UpstreamError):
    """Raised when an upstream answers with a non-2xx status."""

    error_code = "UPSTREAM_REJECTED"

    def __init__(self, url: str, status_code: int, body: str):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"{url} returned HTTP {status_code}: {body}")
