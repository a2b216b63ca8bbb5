"""Service for the recruiter's job directory."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List

from pydantic import ValidationError

from recruiter_pipeline.models.job import Job, JobStatus
from recruiter_pipeline.remote.errors import ApiError, TransportError
from recruiter_pipeline.repositories.job_repository import JobRepository
from recruiter_pipeline.services.pipeline_state import PipelineState

logger = logging.getLogger(__name__)


class JobService:
    """Service for loading the selectable job list.

    Attributes:
        job_repository: Repository for job data access.
        state: Session state the merged list is stored in.
    """

    def __init__(self, job_repository: JobRepository, state: PipelineState):
        """Initialize the service with a repository.

        Args:
            job_repository: JobRepository instance.
            state: PipelineState of the session.
        """
        self.job_repository = job_repository
        self.state = state

    def load_jobs(self) -> List[Job]:
        """Fetch open and ongoing jobs concurrently and merge them.

        A collection whose fetch fails is treated as empty. Jobs are tagged
        with the collection they came from and listed open-then-ongoing in
        backend order.

        Returns:
            Merged list of jobs.
        """
        with ThreadPoolExecutor(max_workers=2) as executor:
            open_future = executor.submit(self._fetch, JobStatus.OPEN, self.job_repository.list_open_jobs)
            ongoing_future = executor.submit(self._fetch, JobStatus.ONGOING, self.job_repository.list_ongoing_jobs)
            jobs = open_future.result() + ongoing_future.result()

        with self.state.lock:
            self.state.jobs = jobs

        logger.info(f"Loaded {len(jobs)} jobs")
        return jobs

    def _fetch(self, job_status: JobStatus, fetch: Callable[[], List[Dict[str, Any]]]) -> List[Job]:
        try:
            records = fetch()
        except (ApiError, TransportError) as error:
            logger.error(f"Error fetching {job_status.value} jobs: {error}")
            return []

        jobs = []
        for record in records:
            try:
                jobs.append(Job(**{**record, "jobStatus": job_status}))
            except (ValidationError, TypeError) as error:
                logger.warning(f"Skipping malformed {job_status.value} job record: {error}")
        return jobs
