"""HTTP transport for the hiring backend."""

from recruiter_pipeline.remote.auth import AuthSession
from recruiter_pipeline.remote.client import ApiClient
from recruiter_pipeline.remote.errors import (
    ApiError,
    UnauthorizedError,
    TransportError,
    SessionExpiredError
)

__all__ = [
    "AuthSession",
    "ApiClient",
    "ApiError",
    "UnauthorizedError",
    "TransportError",
    "SessionExpiredError"
]
