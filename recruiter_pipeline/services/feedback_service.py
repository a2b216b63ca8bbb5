"""Service for interviewer feedback on conducted rounds."""

import logging

from recruiter_pipeline.constants import (
    FEEDBACK_CRITERIA,
    MSG_FILL_FEEDBACK,
    MSG_SELECT_ATTENDANCE
)
from recruiter_pipeline.models import ErrorKind, InterviewFeedbackForm, WorkflowResult
from recruiter_pipeline.remote.errors import ApiError, TransportError
from recruiter_pipeline.repositories.interview_repository import InterviewRepository
from recruiter_pipeline.services.notifier import Notifier

logger = logging.getLogger(__name__)


class FeedbackService:
    """Service that records an interviewer's scores and outcome for a round.

    Submitted feedback is what the backend later shows on the round as
    ``candidate_attended``, ``scores`` and ``interview_outcome``.

    Attributes:
        interview_repository: Repository for interview feedback.
        notifier: Sink for user-visible messages.
    """

    def __init__(self, interview_repository: InterviewRepository, notifier: Notifier):
        self.interview_repository = interview_repository
        self.notifier = notifier

    def is_submitted(self, feedback_id: str) -> bool:
        """Return True if feedback for this round was already submitted.

        A failed check is treated as not submitted.
        """
        try:
            return self.interview_repository.check_feedback_status(feedback_id)
        except (ApiError, TransportError) as error:
            logger.error(f"Error checking feedback status for {feedback_id}: {error}")
            return False

    def validate(self, form: InterviewFeedbackForm) -> str:
        if not form.candidate_attended:
            return MSG_SELECT_ATTENDANCE
        if form.candidate_attended == "yes":
            for criterion in FEEDBACK_CRITERIA:
                if getattr(form, criterion) is None:
                    return MSG_FILL_FEEDBACK
            if not form.interview_outcome:
                return MSG_FILL_FEEDBACK
        return ""

    def submit_feedback(self, form: InterviewFeedbackForm) -> WorkflowResult:
        """Validate and submit interviewer feedback.

        Args:
            form: Attendance, criterion scores and outcome.

        Returns:
            WorkflowResult describing the outcome.
        """
        error_message = self.validate(form)
        if error_message:
            return WorkflowResult.failed(ErrorKind.VALIDATION, error_message)

        payload = {
            "feedback_id": form.feedback_id,
            "candidate_attended": form.candidate_attended,
            "interview_outcome": form.interview_outcome
        }
        for criterion in FEEDBACK_CRITERIA:
            payload[criterion] = getattr(form, criterion) or 0

        try:
            self.interview_repository.submit_feedback(payload)
        except ApiError as error:
            message = error.detail or "Failed to submit feedback"
            logger.error(f"Submitting feedback {form.feedback_id} failed: {error}")
            self.notifier.error(message)
            return WorkflowResult.failed(ErrorKind.SERVER, message)
        except TransportError as error:
            logger.error(f"Submitting feedback {form.feedback_id} failed: {error}")
            self.notifier.error("Failed to submit feedback. Please try again.")
            return WorkflowResult.failed(ErrorKind.NETWORK, "Failed to submit feedback. Please try again.")

        self.notifier.success("Feedback submitted successfully")
        return WorkflowResult.ok("Feedback submitted successfully")
