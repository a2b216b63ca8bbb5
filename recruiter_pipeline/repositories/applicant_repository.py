"""Repository for applicant data access operations."""

from typing import Any, Dict, List
from urllib.parse import quote

from recruiter_pipeline.constants import APPLICANT_STATUS_PATH, JOB_APPLICANTS_PATH
from recruiter_pipeline.remote.client import ApiClient
from recruiter_pipeline.repositories.base_repository import BaseRepository


class ApplicantRepository(BaseRepository):
    """Repository for the applicants of a job posting.

    Attributes:
        api_client: Authenticated client for the hiring backend.
    """

    def __init__(self, api_client: ApiClient):
        """Initialize the repository with an API client.

        Args:
            api_client: ApiClient instance.
        """
        super().__init__(api_client, "applicants")

    def list_applicants(self, job_id: str) -> List[Dict[str, Any]]:
        """Retrieve every applicant of a job.

        Args:
            job_id: The job posting's identifier.

        Returns:
            List of applicant records in backend order.
        """
        path = JOB_APPLICANTS_PATH.format(job_id=quote(job_id, safe=""))
        return self.unwrap_list(self.api_client.get(path))

    def update_status(self, job_id: str, applicant_email: str, status: str) -> Dict[str, Any]:
        """Set an applicant's pipeline status.

        Args:
            job_id: The job posting's identifier.
            applicant_email: Email of the applicant (the mutation key).
            status: New status value.

        Returns:
            Response body from the backend.
        """
        path = APPLICANT_STATUS_PATH.format(
            job_id=quote(job_id, safe=""),
            email=quote(applicant_email, safe="@")
        )
        return self.unwrap_record(self.api_client.put(path, json={"status": status}))
