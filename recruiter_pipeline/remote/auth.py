"""Bearer token holder with refresh and forced logout."""

import logging
import threading
from typing import Callable, List, Optional

import requests

from recruiter_pipeline.constants import REFRESH_TOKEN_PATH

logger = logging.getLogger(__name__)


class AuthSession:
    """Holds the recruiter's access and refresh tokens.

    Attributes:
        base_url: Base URL of the hiring backend.
        http: requests session used for the refresh call.
        timeout: Timeout in seconds for the refresh call.
    """

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        http: Optional[requests.Session] = None,
        timeout: float = 30
    ):
        """Initialize the session with optional starting tokens.

        Args:
            base_url: Base URL of the hiring backend.
            access_token: Initial bearer token.
            refresh_token: Initial refresh token.
            http: Optional requests session (shared with the API client).
            timeout: Timeout in seconds for the refresh call.
        """
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._lock = threading.Lock()
        self._logout_handlers: List[Callable[[], None]] = []

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._access_token)

    def set_tokens(self, access_token: Optional[str], refresh_token: Optional[str] = None) -> None:
        with self._lock:
            self._access_token = access_token
            if refresh_token is not None:
                self._refresh_token = refresh_token

    def on_logout(self, handler: Callable[[], None]) -> None:
        """Register a callback that clears session state on forced logout."""
        self._logout_handlers.append(handler)

    def refresh(self) -> Optional[str]:
        """Exchange the refresh token for a new access token.

        Returns:
            The new access token, or None if there is no refresh token or
            the backend refused it.
        """
        refresh_token = self._refresh_token
        if not refresh_token:
            return None

        try:
            response = self.http.post(
                f"{self.base_url}{REFRESH_TOKEN_PATH}",
                json={"refresh_token": refresh_token},
                timeout=self.timeout
            )
        except requests.RequestException as error:
            logger.error(f"Token refresh error: {error}")
            return None

        if not response.ok:
            logger.warning(f"Token refresh rejected with status {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError:
            return None

        new_token = data.get("access_token") if isinstance(data, dict) else None
        if not new_token:
            return None

        with self._lock:
            self._access_token = new_token
        logger.info("Access token refreshed")
        return new_token

    def logout(self) -> None:
        """Clear all tokens and notify listeners to drop local session state."""
        with self._lock:
            self._access_token = None
            self._refresh_token = None
        logger.warning("Session logged out; login required")
        for handler in self._logout_handlers:
            handler()
