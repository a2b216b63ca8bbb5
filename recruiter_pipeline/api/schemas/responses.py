"""Response schemas for API endpoints."""

from pydantic import BaseModel
from typing import Dict, List, Optional

from recruiter_pipeline.models import ActiveDraft, Applicant, ScheduleDraft, Team
from recruiter_pipeline.utils.details_parser import DetailSection


class PipelineResponse(BaseModel):
    """Response model for the selected job's pipeline buckets."""
    job_id: str
    buckets: Dict[str, List[Applicant]]
    counts: Dict[str, int]
    updating: List[str] = []
    load_error: Optional[str] = None
    logged_out: bool = False


class RoundSummary(BaseModel):
    """Response model for one round on the applicant detail view."""
    round: Optional[str] = None
    status: Optional[str] = None
    is_ai_interview: bool = False
    interview_date: Optional[str] = None
    interview_time: Optional[str] = None
    average_score: Optional[float] = None
    average_display: str = "N/A"
    feedback_id: Optional[str] = None
    recording_url: Optional[str] = None


class ApplicantDetailResponse(BaseModel):
    """Response model for a single applicant with resolved resume and details."""
    applicant: Applicant
    bucket: str
    resume_url: str
    details: List[DetailSection]
    ongoing_rounds: List[RoundSummary]
    previous_rounds: List[RoundSummary]


class ScheduleDraftResponse(BaseModel):
    """Response model for the open schedule draft."""
    active_draft: ActiveDraft
    draft: Optional[ScheduleDraft] = None
    round_options: List[str]
    teams: List[Team] = []
