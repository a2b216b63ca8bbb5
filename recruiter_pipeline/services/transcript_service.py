"""Service for viewing and exporting AI-interview transcripts."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from recruiter_pipeline.models.transcript import (
    SpeakerRole,
    TranscriptEvaluation,
    TranscriptRecord,
    TranscriptTurn
)
from recruiter_pipeline.remote.auth import AuthSession
from recruiter_pipeline.remote.errors import ApiError, TransportError
from recruiter_pipeline.repositories.interview_repository import InterviewRepository
from recruiter_pipeline.services.notifier import Notifier

logger = logging.getLogger(__name__)

SPEAKER_NAMES = {
    SpeakerRole.ASSISTANT.value: "AI Interviewer",
    SpeakerRole.CANDIDATE.value: "Candidate",
}

ROLE_ALIASES = {
    "assistant": SpeakerRole.ASSISTANT,
    "ai": SpeakerRole.ASSISTANT,
    "interviewer": SpeakerRole.ASSISTANT,
    "candidate": SpeakerRole.CANDIDATE,
    "user": SpeakerRole.CANDIDATE,
}


def format_timestamp(timestamp: Optional[str]) -> str:
    """Render an ISO timestamp as HH:MM:SS, or return it verbatim if unparseable."""
    if not timestamp:
        return "--:--:--"
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).strftime("%H:%M:%S")
    except ValueError:
        return timestamp


def format_transcript(record: TranscriptRecord) -> str:
    """Serialize a transcript to plain text for download.

    Args:
        record: Transcript to export.

    Returns:
        Header block, a blank line, then one ``[HH:MM:SS] Speaker: text`` line per turn.
    """
    lines = ["Interview Transcript", f"Feedback ID: {record.feedback_id}"]
    if record.evaluation:
        if record.evaluation.score is not None:
            lines.append(f"Score: {record.evaluation.score:g}/100")
        if record.evaluation.suggestion:
            lines.append(f"Suggestion: {record.evaluation.suggestion}")
    lines.append("")

    for turn in record.turns:
        speaker = SPEAKER_NAMES.get(turn.role, turn.role)
        lines.append(f"[{format_timestamp(turn.timestamp)}] {speaker}: {turn.text}")

    return "\n".join(lines) + "\n"


class TranscriptService:
    """Service that loads transcripts by feedback reference.

    Independent of job and applicant selection; failures are reported as
    notifications and never touch pipeline state.

    Attributes:
        interview_repository: Repository for interview feedback.
        auth: AuthSession, checked for a token before fetching.
        notifier: Sink for user-visible messages.
    """

    def __init__(self, interview_repository: InterviewRepository, auth: AuthSession, notifier: Notifier):
        self.interview_repository = interview_repository
        self.auth = auth
        self.notifier = notifier

    def load_transcript(self, feedback_id: str) -> Optional[TranscriptRecord]:
        """Fetch the transcript and evaluation for a completed round.

        Args:
            feedback_id: Reference stored on the round.

        Returns:
            TranscriptRecord, or None if it could not be loaded.
        """
        if not self.auth.is_authenticated:
            self.notifier.error("Please log in to view the interview transcript")
            return None

        try:
            data = self.interview_repository.get_interview_feedback(feedback_id)
        except ApiError as error:
            logger.error(f"Error fetching transcript {feedback_id}: {error}")
            self.notifier.error(error.detail or "Failed to load interview transcript")
            return None
        except TransportError as error:
            logger.error(f"Error fetching transcript {feedback_id}: {error}")
            self.notifier.error("Error loading interview transcript")
            return None

        return self._dict_to_transcript(feedback_id, data)

    def export_transcript(self, feedback_id: str) -> Optional[str]:
        """Load a transcript and return it as downloadable text."""
        record = self.load_transcript(feedback_id)
        return format_transcript(record) if record else None

    def _dict_to_transcript(self, feedback_id: str, data: Dict[str, Any]) -> TranscriptRecord:
        raw_turns = data.get("transcript") or data.get("turns") or data.get("messages") or []
        turns: List[TranscriptTurn] = []
        if isinstance(raw_turns, list):
            for raw_turn in raw_turns:
                if not isinstance(raw_turn, dict):
                    continue
                role = ROLE_ALIASES.get(str(raw_turn.get("role", "")).lower())
                if role is None:
                    logger.warning(f"Skipping transcript turn with unknown role {raw_turn.get('role')!r}")
                    continue
                turns.append(TranscriptTurn(
                    role=role,
                    text=raw_turn.get("text") or raw_turn.get("content") or "",
                    timestamp=raw_turn.get("timestamp")
                ))

        raw_evaluation = data.get("evaluation")
        if not isinstance(raw_evaluation, dict) and ("score" in data or "suggestion" in data):
            raw_evaluation = {"score": data.get("score"), "suggestion": data.get("suggestion")}

        evaluation = None
        if isinstance(raw_evaluation, dict):
            try:
                evaluation = TranscriptEvaluation(
                    score=raw_evaluation.get("score"),
                    suggestion=raw_evaluation.get("suggestion")
                )
            except ValidationError as error:
                logger.warning(f"Ignoring invalid evaluation for {feedback_id}: {error}")

        return TranscriptRecord(
            feedback_id=str(data.get("feedback_id") or feedback_id),
            turns=turns,
            evaluation=evaluation
        )
