"""Service for the applicant store of the selected job."""

import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from recruiter_pipeline.models.applicant import Applicant, PipelineBucket, STATUS_BUCKETS
from recruiter_pipeline.remote.errors import ApiError, TransportError
from recruiter_pipeline.repositories.applicant_repository import ApplicantRepository
from recruiter_pipeline.services.notifier import Notifier
from recruiter_pipeline.services.pipeline_state import PipelineState

logger = logging.getLogger(__name__)


def bucket_for(applicant: Applicant) -> PipelineBucket:
    """Return the single pipeline bucket an applicant belongs to."""
    return STATUS_BUCKETS.get(applicant.status or "", PipelineBucket.PENDING)


def partition_applicants(applicants: List[Applicant]) -> Dict[PipelineBucket, List[Applicant]]:
    """Split applicants into pipeline buckets by exact status match.

    Every bucket is present in the result (possibly empty), each applicant
    appears in exactly one bucket, and fetch order is kept within buckets.

    Args:
        applicants: Applicants in fetch order.

    Returns:
        Mapping of bucket to the applicants in it.
    """
    buckets: Dict[PipelineBucket, List[Applicant]] = {bucket: [] for bucket in PipelineBucket}
    for applicant in applicants:
        buckets[bucket_for(applicant)].append(applicant)
    return buckets


class ApplicantService:
    """Service that keeps the selected job's applicants in sync with the backend.

    Every fetch replaces the whole applicant list; nothing is merged.

    Attributes:
        applicant_repository: Repository for applicant data access.
        state: Session state holding the applicant list.
        notifier: Sink for user-visible errors.
    """

    def __init__(self, applicant_repository: ApplicantRepository, state: PipelineState, notifier: Notifier):
        """Initialize the service.

        Args:
            applicant_repository: ApplicantRepository instance.
            state: PipelineState of the session.
            notifier: Notifier for user-visible messages.
        """
        self.applicant_repository = applicant_repository
        self.state = state
        self.notifier = notifier

    def select_job(self, job_id: str) -> List[Applicant]:
        """Make a job the active one and load its applicants.

        Args:
            job_id: Job to select, or "" to clear the selection.

        Returns:
            The job's applicants.
        """
        self.state.select_job(job_id)
        return self.load_applicants(job_id)

    def load_applicants(self, job_id: str) -> List[Applicant]:
        """Fetch all applicants of a job and install them if the job is still selected.

        A response for a job that is no longer selected is discarded. On
        failure the store is left empty for the job, never holding another
        job's applicants.

        Args:
            job_id: Job to fetch applicants for.

        Returns:
            The fetched applicants, or an empty list on failure.
        """
        if not job_id:
            self.state.clear_applicants(job_id)
            return []

        try:
            records = self.applicant_repository.list_applicants(job_id)
        except ApiError as error:
            message = error.detail or "Failed to fetch applicants"
            logger.error(f"Error fetching applicants for job {job_id}: {error}")
            self.state.clear_applicants(job_id, message)
            self.notifier.error(message)
            return []
        except TransportError as error:
            logger.error(f"Error fetching applicants for job {job_id}: {error}")
            self.state.clear_applicants(job_id, "Error fetching applicants")
            self.notifier.error("Error fetching applicants")
            return []

        applicants = []
        for record in records:
            applicant = self._read_record(job_id, record)
            if applicant is not None:
                applicants.append(applicant)

        if self.state.replace_applicants(job_id, applicants):
            logger.info(f"Loaded {len(applicants)} applicants for job {job_id}")
        return applicants

    @staticmethod
    def _read_record(job_id: str, record) -> Optional[Applicant]:
        """Read one backend record, falling back to its identity fields.

        Only a record without an email is skipped, since every mutation is
        keyed by it.
        """
        if not isinstance(record, dict) or not isinstance(record.get("email"), str) or not record["email"]:
            logger.warning(f"Skipping applicant record without an email for job {job_id}")
            return None
        try:
            return Applicant.from_api(record)
        except (ValidationError, TypeError) as error:
            logger.warning(f"Reading only identity fields of applicant {record['email']} for job {job_id}: {error}")
        try:
            return Applicant.from_identity(record)
        except (ValidationError, TypeError) as error:
            logger.warning(f"Skipping unreadable applicant record for job {job_id}: {error}")
            return None

    def get_pipeline(self) -> Dict[PipelineBucket, List[Applicant]]:
        """Partition the current applicant list of the selected job."""
        with self.state.lock:
            applicants = list(self.state.applicants)
        return partition_applicants(applicants)
