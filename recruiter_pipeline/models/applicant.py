"""Pydantic models for applicants, their interview rounds and pipeline buckets."""

from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional, Dict, Any
from enum import Enum


class ApplicantStatus(str, Enum):
    """Status of an applicant, in pipeline order.

    ``rejected`` is terminal and reachable from any non-terminal stage.
    """
    DECISION_PENDING = "decision_pending"
    DECISION_PENDING_REVIEW = "decision_pending_review"
    SELECTED_FOR_INTERVIEW = "selected_for_interview"
    INVITATION_SENT = "invitation_sent"
    PROCESSING = "processing"
    SELECTED = "selected"
    OFFER_SENT = "offer_sent"
    OFFER_ACCEPTED = "offer_accepted"
    REJECTED = "rejected"


class PipelineBucket(str, Enum):
    """Display groupings of applicants; every applicant lands in exactly one."""
    PENDING = "pending"
    PENDING_REVIEW = "pending_review"
    CONDUCT_ROUNDS = "conduct_rounds"
    INVITATION_SENT = "invitation_sent"
    ONGOING_ROUNDS = "ongoing_rounds"
    SELECTED = "selected"
    OFFER = "offer"
    REJECTED = "rejected"


# Exact status match; anything missing or unknown falls into PENDING
STATUS_BUCKETS = {
    ApplicantStatus.DECISION_PENDING.value: PipelineBucket.PENDING,
    "applied": PipelineBucket.PENDING,
    ApplicantStatus.DECISION_PENDING_REVIEW.value: PipelineBucket.PENDING_REVIEW,
    ApplicantStatus.SELECTED_FOR_INTERVIEW.value: PipelineBucket.CONDUCT_ROUNDS,
    ApplicantStatus.INVITATION_SENT.value: PipelineBucket.INVITATION_SENT,
    ApplicantStatus.PROCESSING.value: PipelineBucket.ONGOING_ROUNDS,
    ApplicantStatus.SELECTED.value: PipelineBucket.SELECTED,
    ApplicantStatus.OFFER_SENT.value: PipelineBucket.OFFER,
    ApplicantStatus.OFFER_ACCEPTED.value: PipelineBucket.OFFER,
    ApplicantStatus.REJECTED.value: PipelineBucket.REJECTED,
}


def coerce_text(value: Any) -> Any:
    """Render scalar backend values as text; booleans become "yes"/"no"."""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def coerce_score(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class Round(BaseModel):
    """One interview stage instance attached to an applicant.

    Attributes:
        round: Free-text stage name (e.g. "Technical Round 1").
        type: "ai_interview" for AI-conducted rounds.
        status: "scheduled" while the invitation is live.
        interview_date: Date string as sent by the backend.
        interview_time: Time string as sent by the backend.
        location_type: "online", "offline" or "ai_online".
        feedback_id: Reference to the transcript/feedback resource.
        scores: Criterion name to rating (1-5); criteria are not fixed.
    """
    model_config = ConfigDict(extra="allow")

    round: Optional[str] = ""
    type: Optional[str] = None
    status: Optional[str] = None
    team: Optional[str] = None
    interviewer_name: Optional[str] = None
    interviewer_email: Optional[str] = None
    interview_date: Optional[str] = None
    interview_time: Optional[str] = None
    location_type: Optional[str] = None
    meeting_link: Optional[str] = None
    location: Optional[str] = None
    feedback_id: Optional[str] = None
    recording_path: Optional[str] = None
    scores: Optional[Dict[str, Optional[float]]] = None
    comments: Optional[str] = None
    interview_outcome: Optional[str] = None
    candidate_attended: Optional[str] = None
    reason: Optional[str] = None

    @field_validator(
        "round", "type", "status", "team", "interviewer_name", "interviewer_email",
        "interview_date", "interview_time", "location_type", "meeting_link", "location",
        "feedback_id", "recording_path", "comments", "interview_outcome",
        "candidate_attended", "reason",
        mode="before"
    )
    @classmethod
    def stringify_text(cls, value):
        return coerce_text(value)

    @field_validator("scores", mode="before")
    @classmethod
    def normalise_scores(cls, value):
        # Unscored or unreadable criteria are kept as None
        if not isinstance(value, dict):
            return None
        return {str(criterion): coerce_score(score) for criterion, score in value.items()}

    @property
    def is_ai_interview(self) -> bool:
        return self.type == "ai_interview" or self.location_type == "ai_online"


class ApplicantProfile(BaseModel):
    """Fallback copy of resume and details kept on the applicant profile."""
    model_config = ConfigDict(extra="allow")

    resume_url: Optional[str] = None
    additional_details: Optional[str] = None


class Applicant(BaseModel):
    """An applicant for a job, replaced wholesale on every fetch.

    ``email`` is the key every mutation uses, not ``_id``. Every other field
    is read leniently so that a loosely typed record still reaches a bucket.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = None
    job_id: Optional[str] = None
    name: Optional[str] = ""
    email: str
    status: Optional[str] = None
    applied_at: Optional[str] = None
    resume_url: Optional[str] = None
    additional_details: Optional[str] = None
    ongoing_rounds: List[Round] = []
    previous_rounds: List[Round] = []
    profile: Optional[ApplicantProfile] = None

    @field_validator("id", "job_id", "name", "applied_at", "resume_url", "additional_details", mode="before")
    @classmethod
    def stringify_text(cls, value):
        return coerce_text(value)

    @field_validator("status", mode="before")
    @classmethod
    def stringify_status(cls, value):
        # Unknown statuses are kept as text and fall into the pending bucket
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("ongoing_rounds", "previous_rounds", mode="before")
    @classmethod
    def drop_unreadable_rounds(cls, value):
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, (dict, Round))]

    @field_validator("profile", mode="before")
    @classmethod
    def drop_unreadable_profile(cls, value):
        return value if isinstance(value, (dict, ApplicantProfile)) else None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Applicant":
        """Build an applicant from a backend record, mapping ``_id`` to ``id``."""
        payload = dict(data)
        raw_id = payload.pop("_id", None)
        if raw_id is not None and not payload.get("id"):
            payload["id"] = str(raw_id)
        return cls(**payload)

    @classmethod
    def from_identity(cls, data: Dict[str, Any]) -> "Applicant":
        """Build an applicant from only its id, job, name, email and status.

        Used when the full record cannot be read, so the applicant still
        appears in the pipeline.
        """
        raw_id = data.get("id") or data.get("_id")
        return cls(
            id=raw_id if isinstance(raw_id, (str, int)) else None,
            job_id=data.get("job_id") if isinstance(data.get("job_id"), (str, int)) else None,
            name=data.get("name") if isinstance(data.get("name"), str) else "",
            email=data["email"],
            status=data.get("status")
        )

    def effective_resume_url(self) -> Optional[str]:
        if self.resume_url:
            return self.resume_url
        return self.profile.resume_url if self.profile else None

    def effective_additional_details(self) -> Optional[str]:
        if self.additional_details:
            return self.additional_details
        return self.profile.additional_details if self.profile else None
