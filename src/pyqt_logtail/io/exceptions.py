"""Log read exceptions.

``str(exc)`` is always the short message shown in place of the log
content when a refresh fails.
"""

from typing import Optional


class LogReadError(Exception):
    """Base class for every failure of a remote log read."""


class MissingCredentials(LogReadError):
    """Raised when host or secret has not been configured yet."""

    def __init__(self, message: str = "Please configure Host and Secret first."):
        super().__init__(message)


class Unauthorized(LogReadError):
    """Raised when the server rejects the bearer secret (HTTP 401)."""

    def __init__(self, message: str = "Unauthorized (Check Secret)"):
        super().__init__(message)


class RemoteFailure(LogReadError):
    """Raised for any other non-2xx response.

    Attributes:
        status_code: HTTP status returned by the server
        reason: Status text returned by the server
    """

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or f"HTTP {status_code}"
        super().__init__(f"Error: {self.reason}")


class TransportFailure(LogReadError):
    """Raised when the request never produced a response (network, timeout)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Network error: {detail}")
