"""Service for sending offer letters."""

import logging
from typing import Dict, Optional, Tuple

from recruiter_pipeline.constants import MSG_SELECT_JOB, MSG_SELECT_OFFER_FILE, MSG_SUBMIT_IN_PROGRESS
from recruiter_pipeline.models import DraftKind, ErrorKind, OfferDraft, WorkflowResult
from recruiter_pipeline.remote.auth import AuthSession
from recruiter_pipeline.remote.errors import (
    ApiError,
    SessionExpiredError,
    TransportError,
    UnauthorizedError
)
from recruiter_pipeline.repositories.offer_repository import OfferRepository
from recruiter_pipeline.services.applicant_service import ApplicantService
from recruiter_pipeline.services.notifier import Notifier
from recruiter_pipeline.services.pipeline_state import PipelineState

logger = logging.getLogger(__name__)


class OfferService:
    """Service that uploads an offer letter for an applicant.

    The upload attaches its own bearer token and retries exactly once after
    a token refresh; a second 401 logs the session out.

    Attributes:
        offer_repository: Repository for offer letter uploads.
        auth: AuthSession providing and refreshing the token.
        applicant_service: Applicant store used to resync after a send.
        state: Session state holding the draft.
        notifier: Sink for user-visible messages.
        org_name: Organization name override.
        org_email: Organization email override.
    """

    def __init__(
        self,
        offer_repository: OfferRepository,
        auth: AuthSession,
        applicant_service: ApplicantService,
        state: PipelineState,
        notifier: Notifier,
        org_name: Optional[str] = None,
        org_email: Optional[str] = None
    ):
        self.offer_repository = offer_repository
        self.auth = auth
        self.applicant_service = applicant_service
        self.state = state
        self.notifier = notifier
        self.org_name = org_name
        self.org_email = org_email

    def open_offer(self, applicant_email: str) -> OfferDraft:
        """Open an empty offer draft for an applicant.

        Raises:
            ValueError: If the applicant is not loaded.
        """
        self.state.get_applicant(applicant_email)
        self.state.open_draft(DraftKind.OFFER, applicant_email)
        return self.state.offer_draft

    def select_file(self, filename: str, content: bytes, content_type: Optional[str] = None) -> OfferDraft:
        """Attach the offer letter file to the open draft.

        Raises:
            ValueError: If no offer draft is open.
        """
        self.state.require_draft(DraftKind.OFFER)
        with self.state.lock:
            draft = self.state.offer_draft
            draft.filename = filename
            draft.content = content
            draft.content_type = content_type
            draft.error = None
            return draft

    def send_offer(
        self,
        applicant_email: str,
        filename: Optional[str],
        content: Optional[bytes],
        content_type: Optional[str] = None
    ) -> WorkflowResult:
        """Open (or reuse) the applicant's offer draft, attach the file and send it."""
        if not self.state.active_draft.is_open(DraftKind.OFFER, applicant_email):
            self.open_offer(applicant_email)
        if filename and content is not None:
            self.select_file(filename, content, content_type)
        return self.submit()

    def submit(self) -> WorkflowResult:
        """Send the open offer draft.

        Returns:
            WorkflowResult describing the outcome.

        Raises:
            ValueError: If no offer draft is open.
            SessionExpiredError: If the retry after refresh is also unauthorized.
        """
        applicant_email = self.state.require_draft(DraftKind.OFFER)
        draft = self.state.offer_draft
        job_id = self.state.selected_job_id

        if not draft.has_file:
            draft.error = MSG_SELECT_OFFER_FILE
            return WorkflowResult.failed(ErrorKind.VALIDATION, MSG_SELECT_OFFER_FILE)
        if not job_id:
            draft.error = MSG_SELECT_JOB
            return WorkflowResult.failed(ErrorKind.VALIDATION, MSG_SELECT_JOB)

        applicant = self.state.get_applicant(applicant_email)
        job = self.state.selected_job()
        company = job.company if job else None
        fields = {
            "applicantEmail": applicant.email,
            "applicantName": applicant.name,
            "orgEmail": self.org_email or (company.email if company else None) or "",
            "orgName": self.org_name or (company.name if company else None) or "",
            "job_id": job_id
        }
        offer_letter = (draft.filename, draft.content, draft.content_type)

        if not self.state.try_mark_submitting(draft):
            return WorkflowResult.failed(ErrorKind.CONFLICT, MSG_SUBMIT_IN_PROGRESS)
        try:
            self._upload(fields, offer_letter)
        except ApiError as error:
            message = error.detail or "Failed to send offer letter"
            logger.error(f"Sending offer letter to {applicant_email} failed: {error}")
            draft.error = message
            self.notifier.error(message)
            return WorkflowResult.failed(ErrorKind.SERVER, message)
        except TransportError as error:
            logger.error(f"Sending offer letter to {applicant_email} failed: {error}")
            draft.error = "Error sending offer letter"
            self.notifier.error("Error sending offer letter")
            return WorkflowResult.failed(ErrorKind.NETWORK, "Error sending offer letter")
        finally:
            draft.submitting = False

        self.state.close_draft_for(DraftKind.OFFER, applicant_email)
        message = f"Offer letter sent to {applicant.name or applicant_email}"
        self.notifier.success(message)
        self.applicant_service.load_applicants(job_id)
        return WorkflowResult.ok(message)

    def _upload(self, fields: Dict[str, str], offer_letter: Tuple[str, bytes, Optional[str]]) -> None:
        try:
            self.offer_repository.send_offer_letter(fields, offer_letter, self.auth.access_token)
            return
        except UnauthorizedError:
            logger.warning("Offer letter upload unauthorized; refreshing token")

        new_token = self.auth.refresh()
        if not new_token:
            self.auth.logout()
            raise SessionExpiredError("Token refresh failed while sending offer letter")

        try:
            self.offer_repository.send_offer_letter(fields, offer_letter, new_token)
        except UnauthorizedError:
            self.auth.logout()
            raise SessionExpiredError("Unauthorized after token refresh while sending offer letter")
