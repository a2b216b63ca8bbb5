"""Request schemas for API endpoints."""

from pydantic import BaseModel
from typing import Optional


class SessionTokensRequest(BaseModel):
    """Request model for installing the recruiter's tokens."""
    access_token: str
    refresh_token: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    """Request model for a choice from the status control.

    ``status`` is a pipeline status or the "ask_review" meta-option.
    """
    status: str


class ScheduleDraftUpdateRequest(BaseModel):
    """Request model for editing the open schedule draft."""
    round: Optional[str] = None
    team: Optional[str] = None
    location_type: Optional[str] = None
    isAIInterview: Optional[bool] = None


class ReviewRequest(BaseModel):
    """Request model for routing an applicant to a reviewer."""
    reviewer_email: str


class FeedbackRequest(BaseModel):
    """Request model for interviewer feedback on a round."""
    candidate_attended: str = ""
    technical_configuration: Optional[int] = None
    technical_customization: Optional[int] = None
    communication_skills: Optional[int] = None
    leadership_abilities: Optional[int] = None
    enthusiasm: Optional[int] = None
    teamwork: Optional[int] = None
    attitude: Optional[int] = None
    interview_outcome: str = ""
