"""Service for routing applicants to external reviewers."""

import logging
from typing import Optional

from recruiter_pipeline.constants import MSG_ENTER_REVIEWER_EMAIL, MSG_SELECT_JOB, MSG_SUBMIT_IN_PROGRESS
from recruiter_pipeline.models import (
    ApplicantStatus,
    DraftKind,
    ErrorKind,
    ReviewDraft,
    WorkflowResult
)
from recruiter_pipeline.remote.errors import ApiError, TransportError
from recruiter_pipeline.repositories.review_repository import ReviewRepository
from recruiter_pipeline.services.applicant_service import ApplicantService
from recruiter_pipeline.services.notifier import Notifier
from recruiter_pipeline.services.pipeline_state import PipelineState
from recruiter_pipeline.services.status_service import StatusService

logger = logging.getLogger(__name__)


class ReviewService:
    """Service that sends a review request and moves the applicant to pending review.

    The three steps run strictly in order: create the review request, set
    the status to ``decision_pending_review``, then resync the applicant
    list. A failed request stops the chain before the status change.

    Attributes:
        review_repository: Repository for review requests.
        status_service: Status transition engine.
        applicant_service: Applicant store used to resync.
        state: Session state holding the draft.
        notifier: Sink for user-visible messages.
    """

    def __init__(
        self,
        review_repository: ReviewRepository,
        status_service: StatusService,
        applicant_service: ApplicantService,
        state: PipelineState,
        notifier: Notifier
    ):
        self.review_repository = review_repository
        self.status_service = status_service
        self.applicant_service = applicant_service
        self.state = state
        self.notifier = notifier

    def open_review(self, applicant_email: str) -> ReviewDraft:
        """Open an empty review draft for an applicant.

        Raises:
            ValueError: If the applicant is not loaded.
        """
        self.state.get_applicant(applicant_email)
        self.state.open_draft(DraftKind.REVIEW, applicant_email)
        return self.state.review_draft

    def submit(self, reviewer_email: Optional[str] = None) -> WorkflowResult:
        """Send the open review draft, optionally setting the reviewer first.

        Raises:
            ValueError: If no review draft is open.
        """
        applicant_email = self.state.require_draft(DraftKind.REVIEW)
        if reviewer_email is not None:
            self.state.review_draft.reviewer_email = reviewer_email.strip()
        return self.send_review_request(
            self.state.selected_job_id,
            applicant_email,
            self.state.review_draft.reviewer_email
        )

    def send_review_request(self, job_id: str, applicant_email: str, reviewer_email: str) -> WorkflowResult:
        """Route an applicant to a reviewer and flip their status to pending review.

        Args:
            job_id: Job the applicant applied to.
            applicant_email: Email of the applicant.
            reviewer_email: Email the review form link goes to.

        Returns:
            WorkflowResult; a failed status change after a sent request is
            reported as a failure whose message says the request went out.
        """
        draft = self.state.review_draft if self.state.active_draft.is_open(DraftKind.REVIEW, applicant_email) else None
        if not job_id:
            return self._invalid(draft, MSG_SELECT_JOB)
        if not reviewer_email or not reviewer_email.strip():
            return self._invalid(draft, MSG_ENTER_REVIEWER_EMAIL)

        applicant = self.state.get_applicant(applicant_email)
        job = self.state.selected_job()
        payload = {
            "job_id": job_id,
            "job_role": job.role if job else None,
            "company_name": job.company.name if job and job.company else None,
            "applicant_name": applicant.name,
            "applicant_email": applicant.email,
            "reviewer_email": reviewer_email.strip(),
            "resume_url": applicant.effective_resume_url(),
            "additional_details": applicant.effective_additional_details()
        }

        if draft is not None and not self.state.try_mark_submitting(draft):
            return WorkflowResult.failed(ErrorKind.CONFLICT, MSG_SUBMIT_IN_PROGRESS)
        try:
            self.review_repository.create_review_request(payload)
        except ApiError as error:
            return self._fail(draft, ErrorKind.SERVER, error.detail or "Failed to send review request", error)
        except TransportError as error:
            return self._fail(draft, ErrorKind.NETWORK, "Error sending review request", error)
        finally:
            if draft is not None:
                draft.submitting = False

        self.state.close_draft_for(DraftKind.REVIEW, applicant_email)
        sent_message = f"Review request sent to {reviewer_email.strip()}"
        self.notifier.success(sent_message)

        status_result = self.status_service.set_status(
            applicant_email,
            job_id,
            ApplicantStatus.DECISION_PENDING_REVIEW.value,
            resync=False
        )
        self.applicant_service.load_applicants(job_id)

        if not status_result.success:
            message = f"{sent_message}, but the status could not be updated: {status_result.message}"
            self.notifier.error(message)
            return WorkflowResult.failed(status_result.error_kind, message)
        return WorkflowResult.ok(sent_message)

    def _invalid(self, draft: Optional[ReviewDraft], message: str) -> WorkflowResult:
        if draft is not None:
            draft.error = message
        return WorkflowResult.failed(ErrorKind.VALIDATION, message)

    def _fail(self, draft: Optional[ReviewDraft], error_kind: ErrorKind, message: str, error: Exception) -> WorkflowResult:
        logger.error(f"Sending review request failed: {error}")
        if draft is not None:
            draft.error = message
        self.notifier.error(message)
        return WorkflowResult.failed(error_kind, message)
