"""Service for composing and sending interview invitations."""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from recruiter_pipeline.constants import (
    MSG_SELECT_JOB,
    MSG_SELECT_LOCATION_TYPE,
    MSG_SELECT_ROUND,
    MSG_SELECT_TEAM,
    MSG_SUBMIT_IN_PROGRESS
)
from recruiter_pipeline.models import (
    ApplicantStatus,
    DraftKind,
    ErrorKind,
    ScheduleDraft,
    Team,
    WorkflowResult
)
from recruiter_pipeline.remote.errors import ApiError, TransportError
from recruiter_pipeline.repositories.interview_repository import InterviewRepository
from recruiter_pipeline.repositories.job_repository import TeamRepository
from recruiter_pipeline.services.applicant_service import ApplicantService
from recruiter_pipeline.services.notifier import Notifier
from recruiter_pipeline.services.pipeline_state import PipelineState

logger = logging.getLogger(__name__)


class SchedulingService:
    """Service driving the interview scheduling draft.

    The draft is closed until opened for an applicant, stays open while it
    is edited and across failed submits, and closes after a successful send.

    Attributes:
        interview_repository: Repository for sending interview forms.
        team_repository: Repository for the team directory.
        applicant_service: Applicant store used to resync after a send.
        state: Session state holding the draft.
        notifier: Sink for user-visible messages.
        org_name: Organization name override for invitations.
        org_email: Organization email override for invitations.
    """

    def __init__(
        self,
        interview_repository: InterviewRepository,
        team_repository: TeamRepository,
        applicant_service: ApplicantService,
        state: PipelineState,
        notifier: Notifier,
        org_name: Optional[str] = None,
        org_email: Optional[str] = None
    ):
        """Initialize the service.

        Args:
            interview_repository: InterviewRepository instance.
            team_repository: TeamRepository instance.
            applicant_service: ApplicantService instance.
            state: PipelineState of the session.
            notifier: Notifier for user-visible messages.
            org_name: Organization name; defaults to the job's company name.
            org_email: Organization email; defaults to the job's company email.
        """
        self.interview_repository = interview_repository
        self.team_repository = team_repository
        self.applicant_service = applicant_service
        self.state = state
        self.notifier = notifier
        self.org_name = org_name
        self.org_email = org_email

    def open_schedule(self, applicant_email: str) -> ScheduleDraft:
        """Open a fresh schedule draft for an applicant and load the team directory.

        Args:
            applicant_email: Email of the applicant to invite.

        Returns:
            The new, empty draft.

        Raises:
            ValueError: If the applicant is unknown or already has a live invitation.
        """
        applicant = self.state.get_applicant(applicant_email)
        if applicant.status == ApplicantStatus.INVITATION_SENT.value:
            raise ValueError(f"Interview invitation already sent to {applicant_email}")

        self.state.open_draft(DraftKind.SCHEDULE, applicant_email)
        self.load_teams()
        return self.state.schedule_draft

    def load_teams(self) -> None:
        """Load the team directory; a failure leaves it empty."""
        try:
            records = self.team_repository.list_teams()
        except (ApiError, TransportError) as error:
            logger.warning(f"Error fetching teams: {error}")
            records = []

        teams = []
        for record in records:
            try:
                teams.append(Team(**record))
            except (ValidationError, TypeError) as error:
                logger.warning(f"Skipping malformed team record: {error}")

        with self.state.lock:
            self.state.teams = teams

    def update_draft(
        self,
        round_name: Optional[str] = None,
        team: Optional[str] = None,
        location_type: Optional[str] = None,
        is_ai_interview: Optional[bool] = None
    ) -> ScheduleDraft:
        """Edit the open schedule draft; None leaves a field unchanged.

        Round is applied first so the AI toggle is checked against it.

        Raises:
            ValueError: If no schedule draft is open or a value is not allowed.
        """
        self.state.require_draft(DraftKind.SCHEDULE)
        with self.state.lock:
            draft = self.state.schedule_draft
            if round_name is not None:
                draft.select_round(round_name)
            if is_ai_interview is not None:
                draft.set_ai_interview(is_ai_interview)
            if not draft.isAIInterview:
                if team is not None:
                    draft.set_team(team)
                if location_type is not None:
                    draft.set_location_type(location_type)
            draft.error = None
            return draft

    def validate(self, draft: ScheduleDraft) -> Optional[str]:
        """Return the first validation error of a draft, or None if it can be sent."""
        if not draft.round:
            return MSG_SELECT_ROUND
        if draft.isAIInterview:
            return None
        if not draft.location_type:
            return MSG_SELECT_LOCATION_TYPE
        if not draft.team:
            return MSG_SELECT_TEAM
        return None

    def build_payload(self, applicant_email: str, draft: ScheduleDraft) -> Dict[str, Any]:
        applicant = self.state.get_applicant(applicant_email)
        job = self.state.selected_job()
        company = job.company if job else None

        return {
            "applicantName": applicant.name,
            "applicantEmail": applicant.email,
            "round": draft.round,
            "team": draft.team,
            "orgName": self.org_name or (company.name if company else None),
            "orgEmail": self.org_email or (company.email if company else None),
            "job_id": self.state.selected_job_id,
            "location_type": draft.effective_location_type(),
            "is_ai_interview": draft.isAIInterview
        }

    def submit(self) -> WorkflowResult:
        """Validate and send the open schedule draft.

        Validation failures are reported on the draft without calling the
        backend. A failed send keeps the draft as entered so it can be retried.

        Returns:
            WorkflowResult describing the outcome.

        Raises:
            ValueError: If no schedule draft is open.
        """
        applicant_email = self.state.require_draft(DraftKind.SCHEDULE)
        draft = self.state.schedule_draft
        job_id = self.state.selected_job_id

        error_message = MSG_SELECT_JOB if not job_id else self.validate(draft)
        if error_message:
            draft.error = error_message
            return WorkflowResult.failed(ErrorKind.VALIDATION, error_message)

        payload = self.build_payload(applicant_email, draft)

        if not self.state.try_mark_submitting(draft):
            return WorkflowResult.failed(ErrorKind.CONFLICT, MSG_SUBMIT_IN_PROGRESS)
        try:
            self.interview_repository.send_interview_form(payload)
        except ApiError as error:
            return self._fail(draft, ErrorKind.SERVER, error.detail or "Failed to send interview form", error)
        except TransportError as error:
            return self._fail(draft, ErrorKind.NETWORK, "Error sending interview form", error)
        finally:
            draft.submitting = False

        self.state.close_draft_for(DraftKind.SCHEDULE, applicant_email)
        message = f"Interview invitation sent to {payload['applicantName'] or applicant_email}"
        self.notifier.success(message)
        self.applicant_service.load_applicants(job_id)
        return WorkflowResult.ok(message)

    def _fail(self, draft: ScheduleDraft, error_kind: ErrorKind, message: str, error: Exception) -> WorkflowResult:
        logger.error(f"Sending interview form failed: {error}")
        draft.error = message
        self.notifier.error(message)
        return WorkflowResult.failed(error_kind, message)
