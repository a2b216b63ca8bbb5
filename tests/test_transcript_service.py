"""
Tests for the transcript viewer and interviewer feedback.
"""
import pytest
from unittest.mock import MagicMock

from recruiter_pipeline.models import InterviewFeedbackForm, TranscriptRecord, TranscriptTurn
from recruiter_pipeline.remote.errors import ApiError, TransportError
from recruiter_pipeline.services.feedback_service import FeedbackService
from recruiter_pipeline.services.transcript_service import (
    TranscriptService,
    format_timestamp,
    format_transcript
)


@pytest.fixture
def interview_repository():
    mock = MagicMock()
    mock.get_interview_feedback.return_value = {
        "feedback_id": "fb-1",
        "transcript": [
            {"role": "assistant", "text": "Tell me about yourself.", "timestamp": "2026-09-10T14:00:05Z"},
            {"role": "user", "content": "I build compilers.", "timestamp": "2026-09-10T14:00:31Z"},
            {"role": "narrator", "text": "ignored"}
        ],
        "evaluation": {"score": 82, "suggestion": "Proceed to technical round"}
    }
    mock.check_feedback_status.return_value = False
    mock.submit_feedback.return_value = {"success": True}
    return mock


@pytest.fixture
def transcript_service(interview_repository, auth, notifier):
    return TranscriptService(interview_repository, auth, notifier)


@pytest.fixture
def feedback_service(interview_repository, notifier):
    return FeedbackService(interview_repository, notifier)


def test_load_transcript_parses_turns_and_evaluation(transcript_service, interview_repository):
    """Test that turns keep their order and roles are normalized."""
    record = transcript_service.load_transcript("fb-1")

    interview_repository.get_interview_feedback.assert_called_once_with("fb-1")
    assert [turn.role for turn in record.turns] == ["assistant", "candidate"]
    assert record.turns[1].text == "I build compilers."
    assert record.evaluation.score == 82
    assert record.evaluation.suggestion == "Proceed to technical round"


def test_top_level_score_is_read_as_evaluation(transcript_service, interview_repository):
    interview_repository.get_interview_feedback.return_value = {
        "messages": [{"role": "interviewer", "text": "Hi"}],
        "score": 40
    }

    record = transcript_service.load_transcript("fb-9")

    assert record.feedback_id == "fb-9"
    assert record.evaluation.score == 40
    assert record.turns[0].role == "assistant"


def test_export_format(transcript_service):
    """Test the downloadable text layout."""
    text = transcript_service.export_transcript("fb-1")

    assert text == (
        "Interview Transcript\n"
        "Feedback ID: fb-1\n"
        "Score: 82/100\n"
        "Suggestion: Proceed to technical round\n"
        "\n"
        "[14:00:05] AI Interviewer: Tell me about yourself.\n"
        "[14:00:31] Candidate: I build compilers.\n"
    )


def test_export_without_evaluation():
    record = TranscriptRecord(
        feedback_id="fb-2",
        turns=[TranscriptTurn(role="candidate", text="Hello")]
    )

    assert format_transcript(record) == "Interview Transcript\nFeedback ID: fb-2\n\n[--:--:--] Candidate: Hello\n"


@pytest.mark.parametrize("timestamp,expected", [
    ("2026-09-10T08:15:00", "08:15:00"),
    ("2026-09-10T08:15:00+02:00", "08:15:00"),
    ("00:12", "00:12"),
    (None, "--:--:--"),
])
def test_format_timestamp(timestamp, expected):
    assert format_timestamp(timestamp) == expected


def test_load_without_token_notifies_instead_of_fetching(transcript_service, interview_repository, auth, notifier):
    """Test that a logged-out viewer asks the user to log in."""
    auth.set_tokens(None)

    assert transcript_service.load_transcript("fb-1") is None
    interview_repository.get_interview_feedback.assert_not_called()
    assert notifier.peek()[-1].message == "Please log in to view the interview transcript"


@pytest.mark.parametrize("error,message", [
    (ApiError(404, "Feedback not found"), "Feedback not found"),
    (ApiError(500), "Failed to load interview transcript"),
    (TransportError("down"), "Error loading interview transcript"),
])
def test_load_failure_is_a_notification(transcript_service, interview_repository, notifier, error, message):
    """Test that fetch failures surface as notifications only."""
    interview_repository.get_interview_feedback.side_effect = error

    assert transcript_service.export_transcript("fb-1") is None
    assert notifier.peek()[-1].message == message


def test_feedback_requires_attendance(feedback_service, interview_repository):
    result = feedback_service.submit_feedback(InterviewFeedbackForm(feedback_id="fb-1"))

    assert result.message == "Please select whether the candidate attended the interview"
    interview_repository.submit_feedback.assert_not_called()


def test_attended_feedback_requires_every_criterion(feedback_service, interview_repository):
    """Test that an attended interview needs all scores and an outcome."""
    form = InterviewFeedbackForm(
        feedback_id="fb-1",
        candidate_attended="yes",
        technical_configuration=4,
        interview_outcome="selected"
    )

    result = feedback_service.submit_feedback(form)

    assert result.message == "Please fill all required fields"
    interview_repository.submit_feedback.assert_not_called()


def test_no_show_feedback_submits_zero_scores(feedback_service, interview_repository, notifier):
    """Test that a no-show needs no scores."""
    result = feedback_service.submit_feedback(InterviewFeedbackForm(feedback_id="fb-1", candidate_attended="no"))

    assert result.success
    payload = interview_repository.submit_feedback.call_args[0][0]
    assert payload["candidate_attended"] == "no"
    assert payload["teamwork"] == 0
    assert notifier.peek()[-1].message == "Feedback submitted successfully"


def test_full_feedback_submission(feedback_service, interview_repository):
    form = InterviewFeedbackForm(
        feedback_id="fb-1",
        candidate_attended="yes",
        technical_configuration=4,
        technical_customization=3,
        communication_skills=5,
        leadership_abilities=3,
        enthusiasm=4,
        teamwork=5,
        attitude=5,
        interview_outcome="selected"
    )

    assert feedback_service.submit_feedback(form).success
    payload = interview_repository.submit_feedback.call_args[0][0]
    assert payload["communication_skills"] == 5
    assert payload["interview_outcome"] == "selected"


def test_feedback_rejected_by_backend(feedback_service, interview_repository):
    interview_repository.submit_feedback.side_effect = ApiError(200, "Feedback already submitted")

    result = feedback_service.submit_feedback(InterviewFeedbackForm(feedback_id="fb-1", candidate_attended="no"))

    assert result.message == "Feedback already submitted"


def test_failed_status_check_counts_as_not_submitted(feedback_service, interview_repository):
    interview_repository.check_feedback_status.side_effect = TransportError("down")

    assert feedback_service.is_submitted("fb-1") is False
