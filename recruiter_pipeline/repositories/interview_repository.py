"""Repository for interview invitations, transcripts and interviewer feedback."""

from typing import Any, Dict
from urllib.parse import quote

from recruiter_pipeline.constants import (
    CHECK_FEEDBACK_STATUS_PATH,
    INTERVIEW_FEEDBACK_PATH,
    SEND_INTERVIEW_FORM_PATH,
    SUBMIT_FEEDBACK_PATH
)
from recruiter_pipeline.remote.client import ApiClient
from recruiter_pipeline.remote.errors import ApiError
from recruiter_pipeline.repositories.base_repository import BaseRepository


class InterviewRepository(BaseRepository):
    """Repository for interview data on the hiring backend.

    Attributes:
        api_client: Authenticated client for the hiring backend.
    """

    def __init__(self, api_client: ApiClient):
        """Initialize the repository with an API client.

        Args:
            api_client: ApiClient instance.
        """
        super().__init__(api_client, "interviews")

    def send_interview_form(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Send an interview invitation to an applicant.

        Args:
            payload: Invitation fields (applicant, round, team, org, job,
                location_type, is_ai_interview).

        Returns:
            Response body from the backend.
        """
        return self.unwrap_record(self.api_client.post(SEND_INTERVIEW_FORM_PATH, json=payload))

    def get_interview_feedback(self, feedback_id: str) -> Dict[str, Any]:
        """Retrieve the transcript and evaluation recorded for a round.

        Args:
            feedback_id: Reference stored on the completed round.

        Returns:
            Feedback record as dictionary.
        """
        path = INTERVIEW_FEEDBACK_PATH.format(feedback_id=quote(feedback_id, safe=""))
        return self.unwrap_record(self.api_client.get(path), key="feedback")

    def check_feedback_status(self, feedback_id: str) -> bool:
        """Return True if the interviewer already submitted feedback for this round."""
        body = self.api_client.post(
            CHECK_FEEDBACK_STATUS_PATH,
            json={"feedback_id": feedback_id},
            authenticated=False
        )
        record = self.unwrap_record(body)
        return bool(record.get("success") and record.get("submitted"))

    def submit_feedback(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Submit interviewer feedback for a round.

        Args:
            payload: Feedback fields keyed by criterion.

        Returns:
            Response body from the backend.

        Raises:
            ApiError: If the backend reports the submission unsuccessful.
        """
        record = self.unwrap_record(
            self.api_client.post(SUBMIT_FEEDBACK_PATH, json=payload, authenticated=False)
        )
        if record.get("success") is False:
            raise ApiError(200, record.get("message") or record.get("detail"))
        return record
