"""Session domain exceptions."""

from aries_jstor.core.domain.exceptions import UpstreamError


class AuthError(UpstreamError):
    """Raised when the login handshake fails at the transport level."""

    error_code = "AUTH_ERROR"

    def __init__(self, system: str, reason: str):
        self.system = system
        self.reason = reason
        super().__init__(f"Unable to log in to {system}: {reason}")
