"""Authenticated HTTP client for the hiring backend."""

import logging
from typing import Any, Dict, Optional

import requests

from recruiter_pipeline.remote.auth import AuthSession
from recruiter_pipeline.remote.errors import (
    ApiError,
    SessionExpiredError,
    TransportError,
    UnauthorizedError
)

logger = logging.getLogger(__name__)


def extract_detail(response: requests.Response) -> Optional[str]:
    """Pull the human-readable error detail out of a response body.

    Args:
        response: Response from the backend.

    Returns:
        The ``detail`` (or ``message``) field when the body is JSON, else None.
    """
    try:
        body = response.json()
    except ValueError:
        return None

    if not isinstance(body, dict):
        return None

    detail = body.get("detail") or body.get("message")
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        # FastAPI validation errors
        messages = [item.get("msg") for item in detail if isinstance(item, dict) and item.get("msg")]
        return "; ".join(messages) or None
    return None


def parse_body(response: requests.Response) -> Any:
    """Decode a successful response body, tolerating empty or non-JSON bodies."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class ApiClient:
    """JSON client that attaches the bearer token and recovers from 401 once.

    On a 401 the client refreshes the token and retries the request with
    the new token. A failed refresh or a second 401 logs the session out
    and raises SessionExpiredError.

    Attributes:
        base_url: Base URL of the hiring backend.
        auth: AuthSession holding the tokens.
        http: requests session used for all calls.
        timeout: Timeout in seconds per request.
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthSession,
        http: Optional[requests.Session] = None,
        timeout: float = 30
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the hiring backend.
            auth: AuthSession holding the tokens.
            http: Optional requests session; defaults to the auth session's.
            timeout: Timeout in seconds per request.
        """
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.http = http or auth.http
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def send(self, method: str, path: str, headers: Optional[Dict[str, str]] = None, **kwargs) -> requests.Response:
        """Send a single request without any auth handling.

        Raises:
            TransportError: If no response was received.
        """
        try:
            return self.http.request(
                method,
                self.url(path),
                headers=headers or {},
                timeout=self.timeout,
                **kwargs
            )
        except requests.RequestException as error:
            logger.error(f"{method} {path} failed: {error}")
            raise TransportError(str(error)) from error

    def request(self, method: str, path: str, authenticated: bool = True, **kwargs) -> Any:
        """Send a request and return its decoded JSON body.

        Args:
            method: HTTP method.
            path: Path under the base URL.
            authenticated: Attach the bearer token and handle 401 recovery.
            **kwargs: Passed through to requests (json, params, ...).

        Returns:
            Decoded JSON body, or None for empty bodies.

        Raises:
            SessionExpiredError: If authentication could not be recovered.
            UnauthorizedError: If an unauthenticated call is rejected with 401.
            ApiError: For any other non-success status.
            TransportError: If no response was received.
        """
        if not authenticated:
            response = self.send(method, path, **kwargs)
        else:
            response = self.send(method, path, headers=self._auth_headers(self.auth.access_token), **kwargs)

            if response.status_code == 401:
                new_token = self.auth.refresh()
                if not new_token:
                    self.auth.logout()
                    raise SessionExpiredError("Token refresh failed")

                response = self.send(method, path, headers=self._auth_headers(new_token), **kwargs)
                if response.status_code == 401:
                    self.auth.logout()
                    raise SessionExpiredError("Unauthorized after token refresh")

        self.raise_for_status(response)
        return parse_body(response)

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request("PUT", path, **kwargs)

    @staticmethod
    def raise_for_status(response: requests.Response) -> None:
        if response.status_code == 401:
            raise UnauthorizedError(extract_detail(response))
        if not response.ok:
            raise ApiError(response.status_code, extract_detail(response))

    @staticmethod
    def _auth_headers(token: Optional[str]) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"} if token else {}
