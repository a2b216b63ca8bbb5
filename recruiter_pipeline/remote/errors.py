"""Exceptions raised by the remote transport."""

from typing import Optional


class ApiError(Exception):
    """The backend answered with a non-success status.

    Attributes:
        status_code: HTTP status code of the response.
        detail: Human-readable detail reported by the server, if any.
    """

    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail or f"Request failed with status {status_code}")


class UnauthorizedError(ApiError):
    """The backend rejected the bearer token (401)."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(401, detail)


class TransportError(Exception):
    """The request never produced a response (DNS, connection, timeout)."""


class SessionExpiredError(Exception):
    """Authentication could not be recovered; the session has been logged out."""
