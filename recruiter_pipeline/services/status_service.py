"""Service for applicant status transitions."""

import logging
from typing import Callable, Optional

from recruiter_pipeline.constants import ASK_REVIEW_OPTION, MSG_SELECT_JOB, STATUS_LABELS
from recruiter_pipeline.models.applicant import ApplicantStatus
from recruiter_pipeline.models.results import ErrorKind, WorkflowResult
from recruiter_pipeline.remote.errors import ApiError, TransportError
from recruiter_pipeline.repositories.applicant_repository import ApplicantRepository
from recruiter_pipeline.services.applicant_service import ApplicantService
from recruiter_pipeline.services.notifier import Notifier
from recruiter_pipeline.services.pipeline_state import PipelineState

logger = logging.getLogger(__name__)


class StatusService:
    """Service that changes an applicant's pipeline status.

    The new status is never applied locally; after the backend accepts it
    the applicant list is re-fetched. While an applicant's update is in
    flight (including that re-fetch) further updates for the same
    applicant are refused. Updates for different applicants are independent.

    Attributes:
        applicant_repository: Repository for applicant data access.
        applicant_service: Applicant store used to resync after updates.
        state: Session state holding the per-applicant locks.
        notifier: Sink for user-visible messages.
    """

    def __init__(
        self,
        applicant_repository: ApplicantRepository,
        applicant_service: ApplicantService,
        state: PipelineState,
        notifier: Notifier
    ):
        """Initialize the service.

        Args:
            applicant_repository: ApplicantRepository instance.
            applicant_service: ApplicantService instance.
            state: PipelineState of the session.
            notifier: Notifier for user-visible messages.
        """
        self.applicant_repository = applicant_repository
        self.applicant_service = applicant_service
        self.state = state
        self.notifier = notifier

    def set_status(
        self,
        applicant_email: str,
        job_id: str,
        new_status: str,
        resync: bool = True
    ) -> WorkflowResult:
        """Update an applicant's status on the backend and resync.

        A rejected applicant is refused without contacting the backend.

        Args:
            applicant_email: Email of the applicant.
            job_id: Job the applicant applied to.
            new_status: Target status (an ApplicantStatus value).
            resync: Re-fetch the applicant list after a successful update.

        Returns:
            WorkflowResult describing the outcome.

        Raises:
            ValueError: If new_status is not a pipeline status.
        """
        valid_statuses = [status.value for status in ApplicantStatus]
        if new_status not in valid_statuses:
            raise ValueError(f"Invalid status '{new_status}'. Must be one of: {', '.join(valid_statuses)}")

        if not job_id:
            return WorkflowResult.failed(ErrorKind.VALIDATION, MSG_SELECT_JOB)

        applicant = self.state.find_applicant(applicant_email)
        if applicant is not None and applicant.status == ApplicantStatus.REJECTED.value:
            message = f"{applicant.name or applicant_email} has been rejected; the status can no longer change"
            logger.warning(f"Refused status change of rejected applicant {applicant_email} to {new_status}")
            self.notifier.error(message)
            return WorkflowResult.failed(ErrorKind.VALIDATION, message)

        if not self.state.try_mark_updating(applicant_email):
            return WorkflowResult.failed(
                ErrorKind.CONFLICT,
                f"Status update already in progress for {applicant_email}"
            )

        try:
            try:
                self.applicant_repository.update_status(job_id, applicant_email, new_status)
            except ApiError as error:
                message = error.detail or "Failed to update applicant status"
                logger.error(f"Status update for {applicant_email} failed: {error}")
                self.notifier.error(message)
                return WorkflowResult.failed(ErrorKind.SERVER, message)
            except TransportError as error:
                logger.error(f"Status update for {applicant_email} failed: {error}")
                self.notifier.error("Error updating applicant status")
                return WorkflowResult.failed(ErrorKind.NETWORK, "Error updating applicant status")

            label = STATUS_LABELS.get(new_status, new_status)
            logger.info(f"Status of {applicant_email} on job {job_id} set to {new_status}")
            self.notifier.success(f"Status updated to {label}")

            if resync:
                self.applicant_service.load_applicants(job_id)
            return WorkflowResult.ok(f"Status updated to {label}")
        finally:
            self.state.clear_updating(applicant_email)

    def select_option(
        self,
        applicant_email: str,
        job_id: str,
        option: str,
        open_review: Callable[[str], None]
    ) -> Optional[WorkflowResult]:
        """Handle a choice from an applicant's status control.

        "ask_review" opens the review request workflow through ``open_review``
        instead of changing the status; every other option is a status.

        Args:
            applicant_email: Email of the applicant.
            job_id: Job the applicant applied to.
            option: Chosen status or the "ask_review" meta-option.
            open_review: Opens the review draft for an applicant email.

        Returns:
            The status update result, or None when the review draft was opened.
        """
        if option == ASK_REVIEW_OPTION:
            open_review(applicant_email)
            return None
        return self.set_status(applicant_email, job_id, option)
