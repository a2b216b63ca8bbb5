"""Repository for external review requests."""

from typing import Any, Dict

from recruiter_pipeline.constants import REVIEW_REQUEST_PATH
from recruiter_pipeline.remote.client import ApiClient
from recruiter_pipeline.repositories.base_repository import BaseRepository


class ReviewRepository(BaseRepository):
    """Repository for routing applicants to external reviewers."""

    def __init__(self, api_client: ApiClient):
        super().__init__(api_client, "reviews")

    def create_review_request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a review request; the backend emails the reviewer a form link.

        Args:
            payload: Job, applicant, reviewer and profile fields.

        Returns:
            Response body from the backend.
        """
        return self.unwrap_record(self.api_client.post(REVIEW_REQUEST_PATH, json=payload))
