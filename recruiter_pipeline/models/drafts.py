"""Pydantic models for the ephemeral drafts behind each recruiter workflow."""

from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional
from enum import Enum

from recruiter_pipeline.constants import (
    AI_LOCATION_TYPE,
    INITIAL_SCREENING_ROUND,
    LOCATION_TYPES,
    ROUND_OPTIONS,
)


class ScheduleDraft(BaseModel):
    """Interview invitation being composed for one applicant.

    Attributes:
        round: Selected stage label, "" until chosen.
        team: Team the interview is routed to, "" when unset.
        location_type: "online", "offline" or "" when unset.
        isAIInterview: Only allowed for the initial screening round.
        error: Inline form error from the last submit attempt.
        submitting: True while the invitation is being sent.
    """
    round: str = ""
    team: str = ""
    location_type: str = ""
    isAIInterview: bool = False
    error: Optional[str] = None
    submitting: bool = False

    @model_validator(mode="after")
    def force_ai_flag(self) -> "ScheduleDraft":
        if self.round != INITIAL_SCREENING_ROUND and self.isAIInterview:
            self.isAIInterview = False
        return self

    def select_round(self, round_name: str) -> None:
        """Select the stage; any stage but initial screening clears the AI flag."""
        if round_name not in ROUND_OPTIONS:
            raise ValueError(f"Unknown interview round '{round_name}'")
        self.round = round_name
        if round_name != INITIAL_SCREENING_ROUND:
            self.isAIInterview = False

    def set_ai_interview(self, enabled: bool) -> None:
        """Toggle AI-interview mode; turning it on clears team and location."""
        if enabled and self.round != INITIAL_SCREENING_ROUND:
            raise ValueError(f"AI interviews are only available for the {INITIAL_SCREENING_ROUND}")
        self.isAIInterview = enabled
        if enabled:
            self.team = ""
            self.location_type = ""

    def set_location_type(self, location_type: str) -> None:
        if location_type and location_type not in LOCATION_TYPES:
            raise ValueError(f"Unknown location type '{location_type}'")
        self.location_type = location_type

    def set_team(self, team: str) -> None:
        self.team = team

    def effective_location_type(self) -> str:
        return AI_LOCATION_TYPE if self.isAIInterview else self.location_type


class OfferDraft(BaseModel):
    """Offer letter attachment chosen for one applicant."""
    filename: Optional[str] = None
    content: Optional[bytes] = None
    content_type: Optional[str] = None
    error: Optional[str] = None
    submitting: bool = False

    @property
    def has_file(self) -> bool:
        return bool(self.filename) and self.content is not None


class ReviewDraft(BaseModel):
    """Reviewer routing being composed for one applicant."""
    applicant_email: str
    reviewer_email: str = ""
    error: Optional[str] = None
    submitting: bool = False


class DraftKind(str, Enum):
    """Which workflow modal is open."""
    NONE = "none"
    SCHEDULE = "schedule"
    OFFER = "offer"
    REVIEW = "review"


class ActiveDraft(BaseModel):
    """The single open draft of the session, keyed by applicant email."""
    model_config = ConfigDict(use_enum_values=True)

    kind: DraftKind = DraftKind.NONE
    email: Optional[str] = None

    @model_validator(mode="after")
    def check_email(self) -> "ActiveDraft":
        if self.kind == DraftKind.NONE.value:
            self.email = None
        elif not self.email:
            raise ValueError(f"A {self.kind} draft needs an applicant email")
        return self

    def is_open(self, kind: DraftKind, email: Optional[str] = None) -> bool:
        if self.kind != kind.value:
            return False
        return email is None or self.email == email
