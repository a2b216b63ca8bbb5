"""Pydantic models for AI-interview transcripts and interviewer feedback."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from enum import Enum


class SpeakerRole(str, Enum):
    """Who spoke a transcript turn."""
    ASSISTANT = "assistant"
    CANDIDATE = "candidate"


class TranscriptTurn(BaseModel):
    """A single timestamped utterance in an AI interview."""
    model_config = ConfigDict(use_enum_values=True)

    role: SpeakerRole
    text: str = ""
    timestamp: Optional[str] = None


class TranscriptEvaluation(BaseModel):
    """Summary evaluation produced after an AI interview."""
    score: Optional[float] = Field(default=None, ge=0, le=100)
    suggestion: Optional[str] = None


class TranscriptRecord(BaseModel):
    """Transcript and evaluation of one completed AI interview round.

    Attributes:
        feedback_id: Reference stored on the completed round.
        turns: Speaker turns in the order they were spoken.
        evaluation: Optional score and suggestion.
    """
    model_config = ConfigDict(extra="allow")

    feedback_id: str
    turns: List[TranscriptTurn] = []
    evaluation: Optional[TranscriptEvaluation] = None


class InterviewFeedbackForm(BaseModel):
    """Interviewer's feedback on a round they conducted.

    Criterion scores are 1-5 and only required when the candidate attended.
    """
    feedback_id: str
    candidate_attended: str = ""
    technical_configuration: Optional[int] = Field(default=None, ge=1, le=5)
    technical_customization: Optional[int] = Field(default=None, ge=1, le=5)
    communication_skills: Optional[int] = Field(default=None, ge=1, le=5)
    leadership_abilities: Optional[int] = Field(default=None, ge=1, le=5)
    enthusiasm: Optional[int] = Field(default=None, ge=1, le=5)
    teamwork: Optional[int] = Field(default=None, ge=1, le=5)
    attitude: Optional[int] = Field(default=None, ge=1, le=5)
    interview_outcome: str = ""
