"""Pydantic models for the recruiter pipeline."""

from recruiter_pipeline.models.job import Company, JobStatus, Job, Team
from recruiter_pipeline.models.applicant import (
    ApplicantStatus,
    PipelineBucket,
    Round,
    ApplicantProfile,
    Applicant
)
from recruiter_pipeline.models.drafts import (
    ScheduleDraft,
    OfferDraft,
    ReviewDraft,
    DraftKind,
    ActiveDraft
)
from recruiter_pipeline.models.transcript import (
    SpeakerRole,
    TranscriptTurn,
    TranscriptEvaluation,
    TranscriptRecord,
    InterviewFeedbackForm
)
from recruiter_pipeline.models.results import (
    NotificationLevel,
    Notification,
    ErrorKind,
    WorkflowResult
)

__all__ = [
    "Company",
    "JobStatus",
    "Job",
    "Team",
    "ApplicantStatus",
    "PipelineBucket",
    "Round",
    "ApplicantProfile",
    "Applicant",
    "ScheduleDraft",
    "OfferDraft",
    "ReviewDraft",
    "DraftKind",
    "ActiveDraft",
    "SpeakerRole",
    "TranscriptTurn",
    "TranscriptEvaluation",
    "TranscriptRecord",
    "InterviewFeedbackForm",
    "NotificationLevel",
    "Notification",
    "ErrorKind",
    "WorkflowResult"
]
