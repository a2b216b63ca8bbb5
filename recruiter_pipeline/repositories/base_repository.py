"""Base repository with the response handling shared by all remote gateways."""

from typing import Any, Dict, List, Optional

from recruiter_pipeline.remote.client import ApiClient


class BaseRepository:
    """Base repository over the hiring backend's REST API.

    Remote errors (ApiError, TransportError, SessionExpiredError) are not
    caught here; services decide how each one is surfaced.

    Attributes:
        api_client: Authenticated client for the hiring backend.
        resource_name: Key the backend wraps list responses in (e.g. "jobs").
    """

    def __init__(self, api_client: ApiClient, resource_name: str):
        """Initialize the base repository.

        Args:
            api_client: ApiClient instance.
            resource_name: Wrapper key for list responses (e.g. "applicants").
        """
        self.api_client = api_client
        self.resource_name = resource_name

    def unwrap_list(self, body: Any) -> List[Dict[str, Any]]:
        """Extract the record list from a list response.

        Accepts a bare JSON list or a dict wrapping it under the resource
        name or "data".

        Args:
            body: Decoded response body.

        Returns:
            List of records; empty when the body holds none.
        """
        if isinstance(body, list):
            return body
        if isinstance(body, dict):
            for key in (self.resource_name, "data"):
                value = body.get(key)
                if isinstance(value, list):
                    return value
        return []

    @staticmethod
    def unwrap_record(body: Any, key: Optional[str] = None) -> Dict[str, Any]:
        """Extract a single record, optionally nested under ``key``."""
        if not isinstance(body, dict):
            return {}
        if key and isinstance(body.get(key), dict):
            return body[key]
        return body
