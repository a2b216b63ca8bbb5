"""Repository for job posting and team data access."""

from typing import Any, Dict, List

from recruiter_pipeline.constants import (
    JOBPOST_ONGOING_PATH,
    JOBPOST_PATH,
    ORGANIZATION_TEAMS_PATH
)
from recruiter_pipeline.remote.client import ApiClient
from recruiter_pipeline.repositories.base_repository import BaseRepository


class JobRepository(BaseRepository):
    """Repository for the organization's job postings."""

    def __init__(self, api_client: ApiClient):
        super().__init__(api_client, "jobs")

    def list_open_jobs(self) -> List[Dict[str, Any]]:
        """Retrieve the organization's open job postings.

        Returns:
            List of job records in backend order.
        """
        return self.unwrap_list(self.api_client.get(JOBPOST_PATH))

    def list_ongoing_jobs(self) -> List[Dict[str, Any]]:
        """Retrieve the organization's ongoing job postings.

        Returns:
            List of job records in backend order.
        """
        return self.unwrap_list(self.api_client.get(JOBPOST_ONGOING_PATH))


class TeamRepository(BaseRepository):
    """Repository for the organization's team directory."""

    def __init__(self, api_client: ApiClient):
        super().__init__(api_client, "teams")

    def list_teams(self) -> List[Dict[str, Any]]:
        return self.unwrap_list(self.api_client.get(ORGANIZATION_TEAMS_PATH))
