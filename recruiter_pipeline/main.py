"""FastAPI application for the recruiter's applicant pipeline console."""

import logging
from typing import List, Optional

import requests
from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from recruiter_pipeline.api.schemas.requests import (
    FeedbackRequest,
    ReviewRequest,
    ScheduleDraftUpdateRequest,
    SessionTokensRequest,
    StatusUpdateRequest
)
from recruiter_pipeline.api.schemas.responses import (
    ApplicantDetailResponse,
    PipelineResponse,
    RoundSummary,
    ScheduleDraftResponse
)
from recruiter_pipeline.config import Settings, settings
from recruiter_pipeline.constants import MSG_SESSION_EXPIRED, ROUND_OPTIONS
from recruiter_pipeline.logger import setup_logger
from recruiter_pipeline.models import (
    ActiveDraft,
    DraftKind,
    ErrorKind,
    InterviewFeedbackForm,
    Job,
    Notification,
    Round,
    TranscriptRecord,
    WorkflowResult
)
from recruiter_pipeline.remote.auth import AuthSession
from recruiter_pipeline.remote.client import ApiClient
from recruiter_pipeline.remote.errors import SessionExpiredError
from recruiter_pipeline.repositories.applicant_repository import ApplicantRepository
from recruiter_pipeline.repositories.interview_repository import InterviewRepository
from recruiter_pipeline.repositories.job_repository import JobRepository, TeamRepository
from recruiter_pipeline.repositories.offer_repository import OfferRepository
from recruiter_pipeline.repositories.review_repository import ReviewRepository
from recruiter_pipeline.services.applicant_service import ApplicantService, bucket_for
from recruiter_pipeline.services.feedback_service import FeedbackService
from recruiter_pipeline.services.job_service import JobService
from recruiter_pipeline.services.notifier import Notifier
from recruiter_pipeline.services.offer_service import OfferService
from recruiter_pipeline.services.pipeline_state import PipelineState
from recruiter_pipeline.services.review_service import ReviewService
from recruiter_pipeline.services.scheduling_service import SchedulingService
from recruiter_pipeline.services.status_service import StatusService
from recruiter_pipeline.services.transcript_service import TranscriptService
from recruiter_pipeline.utils.details_parser import parse_additional_details
from recruiter_pipeline.utils.scoring import average_score, format_average
from recruiter_pipeline.utils.storage import resolve_storage_url

logger = logging.getLogger(__name__)


class PipelineServices:
    """Wires repositories and services for one recruiter session.

    Attributes:
        settings: Settings the session was built from.
        state: Session state shared by all workflows.
        notifier: Notification feed shared by all workflows.
        auth: Token holder; a forced logout resets ``state``.
    """

    def __init__(self, config: Settings, http: Optional[requests.Session] = None):
        """Build the service graph.

        Args:
            config: Settings for the backend URL, tokens and organization.
            http: Optional requests session (tests pass a fake one).
        """
        self.settings = config
        self.state = PipelineState()
        self.notifier = Notifier()

        self.auth = AuthSession(
            config.api_base_url,
            access_token=config.access_token,
            refresh_token=config.refresh_token,
            http=http,
            timeout=config.request_timeout
        )
        self.auth.on_logout(self.state.reset)
        api_client = ApiClient(config.api_base_url, self.auth, timeout=config.request_timeout)

        applicant_repository = ApplicantRepository(api_client)
        interview_repository = InterviewRepository(api_client)

        self.job_service = JobService(JobRepository(api_client), self.state)
        self.applicant_service = ApplicantService(applicant_repository, self.state, self.notifier)
        self.status_service = StatusService(
            applicant_repository, self.applicant_service, self.state, self.notifier
        )
        self.scheduling_service = SchedulingService(
            interview_repository,
            TeamRepository(api_client),
            self.applicant_service,
            self.state,
            self.notifier,
            org_name=config.org_name,
            org_email=config.org_email
        )
        self.offer_service = OfferService(
            OfferRepository(api_client),
            self.auth,
            self.applicant_service,
            self.state,
            self.notifier,
            org_name=config.org_name,
            org_email=config.org_email
        )
        self.review_service = ReviewService(
            ReviewRepository(api_client),
            self.status_service,
            self.applicant_service,
            self.state,
            self.notifier
        )
        self.transcript_service = TranscriptService(interview_repository, self.auth, self.notifier)
        self.feedback_service = FeedbackService(interview_repository, self.notifier)


setup_logger(settings.log_level)

app = FastAPI(title="Recruiter Pipeline Console")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

services = PipelineServices(settings)


# Global exception handlers
@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Convert ValueError to appropriate HTTP exception.

    Automatically handles common patterns:
    - "not found" → 404 Not Found
    - "already" → 409 Conflict
    - Everything else → 400 Bad Request
    """
    error_msg = str(exc).lower()

    if "not found" in error_msg:
        status_code = 404
    elif "already" in error_msg:
        status_code = 409
    else:
        status_code = 400

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc)}
    )


@app.exception_handler(SessionExpiredError)
async def session_expired_handler(request: Request, exc: SessionExpiredError):
    """Tell the client to send the recruiter back to login."""
    return JSONResponse(
        status_code=401,
        content={"detail": MSG_SESSION_EXPIRED}
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Convert unhandled exceptions to 500 Internal Server Error.

    Prevents stack traces from being exposed to clients.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal server error: {str(exc)}"}
    )


RESULT_STATUS_CODES = {
    ErrorKind.VALIDATION.value: 422,
    ErrorKind.CONFLICT.value: 409,
    ErrorKind.SERVER.value: 502,
    ErrorKind.NETWORK.value: 502,
}


def check_result(result: WorkflowResult) -> WorkflowResult:
    """Raise an HTTPException for a failed workflow, else pass the result through."""
    if not result.success:
        raise HTTPException(
            status_code=RESULT_STATUS_CODES.get(result.error_kind, 400),
            detail=result.message
        )
    return result


def summarize_round(round_data: Round) -> RoundSummary:
    return RoundSummary(
        round=round_data.round,
        status=round_data.status,
        is_ai_interview=round_data.is_ai_interview,
        interview_date=round_data.interview_date,
        interview_time=round_data.interview_time,
        average_score=average_score(round_data.scores),
        average_display=format_average(round_data.scores),
        feedback_id=round_data.feedback_id,
        recording_url=resolve_storage_url(round_data.recording_path, services.settings.api_base_url) or None
    )


@app.get("/")
def root():
    """Health check endpoint.

    Returns:
        Dictionary with status indicator.
    """
    return {"status": "ok"}


# Session endpoints

@app.post("/session")
def install_tokens(request: SessionTokensRequest):
    """Install the recruiter's access and refresh tokens.

    Args:
        request: SessionTokensRequest with access_token and optional refresh_token.

    Returns:
        Dictionary with authentication flag.
    """
    services.auth.set_tokens(request.access_token, request.refresh_token)
    services.state.logged_out = False
    return {"authenticated": services.auth.is_authenticated}


@app.get("/notifications", response_model=List[Notification])
def get_notifications():
    """Return and clear pending notifications."""
    return services.notifier.drain()


# Job and pipeline endpoints

@app.get("/jobs", response_model=List[Job])
def list_jobs():
    """Load the merged list of open and ongoing jobs.

    Returns:
        List of Job objects, open jobs first.
    """
    return services.job_service.load_jobs()


@app.post("/jobs/{job_id}/select", response_model=PipelineResponse)
def select_job(job_id: str):
    """Make a job active and load its applicants.

    Args:
        job_id: ID of the job posting.

    Returns:
        PipelineResponse for the job.
    """
    services.applicant_service.select_job(job_id)
    return get_pipeline()


@app.get("/pipeline", response_model=PipelineResponse)
def get_pipeline():
    """Return the selected job's applicants partitioned into pipeline buckets."""
    buckets = services.applicant_service.get_pipeline()
    with services.state.lock:
        job_id = services.state.selected_job_id
        updating = sorted(services.state.updating_emails)
        load_error = services.state.load_error
        logged_out = services.state.logged_out

    return PipelineResponse(
        job_id=job_id,
        buckets={bucket.value: applicants for bucket, applicants in buckets.items()},
        counts={bucket.value: len(applicants) for bucket, applicants in buckets.items()},
        updating=updating,
        load_error=load_error,
        logged_out=logged_out
    )


@app.get("/applicants/{email}", response_model=ApplicantDetailResponse)
def get_applicant(email: str):
    """Get an applicant with resolved resume URL, parsed details and round scores.

    Args:
        email: Email of the applicant.

    Returns:
        ApplicantDetailResponse object.

    Raises:
        HTTPException: If the applicant is not loaded.
    """
    applicant = services.state.get_applicant(email)
    return ApplicantDetailResponse(
        applicant=applicant,
        bucket=bucket_for(applicant).value,
        resume_url=resolve_storage_url(applicant.effective_resume_url(), services.settings.api_base_url),
        details=parse_additional_details(applicant.effective_additional_details()),
        ongoing_rounds=[summarize_round(r) for r in applicant.ongoing_rounds],
        previous_rounds=[summarize_round(r) for r in applicant.previous_rounds]
    )


@app.put("/applicants/{email}/status")
def update_applicant_status(email: str, request: StatusUpdateRequest):
    """Apply a choice from the applicant's status control.

    "ask_review" opens the review draft instead of changing the status.

    Args:
        email: Email of the applicant.
        request: StatusUpdateRequest with the chosen option.

    Returns:
        WorkflowResult, or the opened draft for "ask_review".
    """
    result = services.status_service.select_option(
        email,
        services.state.selected_job_id,
        request.status,
        open_review=services.review_service.open_review
    )
    if result is None:
        return {"active_draft": services.state.active_draft}
    return check_result(result)


# Draft endpoints

@app.delete("/drafts", response_model=ActiveDraft)
def close_draft():
    """Close whichever draft is open."""
    services.state.close_draft()
    return services.state.active_draft


@app.post("/applicants/{email}/schedule", response_model=ScheduleDraftResponse)
def open_schedule(email: str):
    """Open a schedule draft for an applicant.

    Raises:
        HTTPException: If the applicant is unknown or already invited.
    """
    draft = services.scheduling_service.open_schedule(email)
    return ScheduleDraftResponse(
        active_draft=services.state.active_draft,
        draft=draft,
        round_options=ROUND_OPTIONS,
        teams=services.state.teams
    )


@app.patch("/schedule", response_model=ScheduleDraftResponse)
def update_schedule(request: ScheduleDraftUpdateRequest):
    """Edit the open schedule draft."""
    draft = services.scheduling_service.update_draft(
        round_name=request.round,
        team=request.team,
        location_type=request.location_type,
        is_ai_interview=request.isAIInterview
    )
    return ScheduleDraftResponse(
        active_draft=services.state.active_draft,
        draft=draft,
        round_options=ROUND_OPTIONS,
        teams=services.state.teams
    )


@app.post("/schedule/submit", response_model=WorkflowResult)
def submit_schedule():
    """Send the open schedule draft as an interview invitation."""
    return check_result(services.scheduling_service.submit())


@app.post("/applicants/{email}/offer", response_model=WorkflowResult)
def send_offer(email: str, offer_letter: Optional[UploadFile] = File(None)):
    """Send an offer letter to an applicant.

    Args:
        email: Email of the applicant.
        offer_letter: PDF/DOC/DOCX attachment.

    Returns:
        WorkflowResult of the send.
    """
    filename = content = content_type = None
    if offer_letter is not None and offer_letter.filename:
        filename = offer_letter.filename
        content = offer_letter.file.read()
        content_type = offer_letter.content_type
    return check_result(services.offer_service.send_offer(email, filename, content, content_type))


@app.post("/applicants/{email}/review", response_model=WorkflowResult)
def send_review_request(email: str, request: ReviewRequest):
    """Route an applicant to a reviewer and move them to pending review."""
    if not services.state.active_draft.is_open(DraftKind.REVIEW, email):
        services.review_service.open_review(email)
    return check_result(services.review_service.submit(request.reviewer_email))


# Transcript and feedback endpoints

@app.get("/transcripts/{feedback_id}", response_model=TranscriptRecord)
def get_transcript(feedback_id: str):
    """Get the AI-interview transcript recorded for a round."""
    record = services.transcript_service.load_transcript(feedback_id)
    if record is None:
        raise HTTPException(status_code=502, detail="Failed to load interview transcript")
    return record


@app.get("/transcripts/{feedback_id}/export", response_class=PlainTextResponse)
def export_transcript(feedback_id: str):
    """Download a transcript as timestamped plain text."""
    text = services.transcript_service.export_transcript(feedback_id)
    if text is None:
        raise HTTPException(status_code=502, detail="Failed to load interview transcript")
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="transcript_{feedback_id}.txt"'}
    )


@app.get("/feedback/{feedback_id}")
def get_feedback_status(feedback_id: str):
    """Check whether interviewer feedback was already submitted."""
    return {"submitted": services.feedback_service.is_submitted(feedback_id)}


@app.post("/feedback/{feedback_id}", response_model=WorkflowResult)
def submit_feedback(feedback_id: str, request: FeedbackRequest):
    """Submit interviewer feedback for a round."""
    form = InterviewFeedbackForm(feedback_id=feedback_id, **request.model_dump())
    return check_result(services.feedback_service.submit_feedback(form))
