"""
Shared fixtures for recruiter pipeline tests.
"""
import json
import pytest
import requests
from unittest.mock import MagicMock

from recruiter_pipeline.models import Job
from recruiter_pipeline.remote.auth import AuthSession
from recruiter_pipeline.services.applicant_service import ApplicantService
from recruiter_pipeline.services.notifier import Notifier
from recruiter_pipeline.services.pipeline_state import PipelineState

BASE_URL = "https://api.test"


def build_response(status_code=200, body=None):
    """Build a real requests.Response with a JSON body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = BASE_URL
    if body is None:
        response._content = b""
    else:
        response._content = json.dumps(body).encode()
        response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""
    return build_response


@pytest.fixture
def applicant_records():
    """Backend records for three applicants of job-1."""
    return [
        {
            "_id": "a1",
            "job_id": "job-1",
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "status": "selected_for_interview",
            "applied_at": "2026-09-01T10:00:00Z",
            "resume_url": "resumes/ada.pdf",
            "ongoing_rounds": [],
            "previous_rounds": []
        },
        {
            "_id": "a2",
            "job_id": "job-1",
            "name": "Grace Hopper",
            "email": "grace@example.com",
            "applied_at": "2026-09-02T10:00:00Z",
            "profile": {
                "resume_url": "https://bucket.s3.amazonaws.com/grace.pdf",
                "additional_details": "EXPERIENCE\nCompany: Navy"
            }
        },
        {
            "_id": "a3",
            "job_id": "job-1",
            "name": "Alan Turing",
            "email": "alan@example.com",
            "status": "invitation_sent",
            "applied_at": "2026-09-03T10:00:00Z",
            "ongoing_rounds": [
                {"round": "Technical Round 1", "status": "scheduled", "location_type": "online"}
            ],
            "previous_rounds": [
                {
                    "round": "Initial Screening Round",
                    "type": "ai_interview",
                    "feedback_id": "fb-1",
                    "scores": {"communication": 4, "technical": 3, "culture_fit": 5}
                }
            ]
        }
    ]


@pytest.fixture
def state():
    """Session state with one known job."""
    pipeline_state = PipelineState()
    pipeline_state.jobs = [
        Job(
            job_id="job-1",
            role="Backend Engineer",
            location="Remote",
            company={"name": "Acme", "email": "hr@acme.io"},
            jobStatus="open"
        ),
        Job(job_id="job-2", role="Data Engineer", jobStatus="ongoing")
    ]
    return pipeline_state


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def applicant_repository(applicant_records):
    """Mock applicant repository serving applicant_records for every job."""
    mock = MagicMock()
    mock.list_applicants.return_value = applicant_records
    mock.update_status.return_value = {"success": True}
    return mock


@pytest.fixture
def applicant_service(applicant_repository, state, notifier):
    return ApplicantService(applicant_repository, state, notifier)


@pytest.fixture
def loaded_state(applicant_service, state):
    """State with job-1 selected and its applicants loaded."""
    applicant_service.select_job("job-1")
    return state


@pytest.fixture
def auth():
    """Authenticated session whose refresh is mocked out."""
    session = AuthSession(BASE_URL, access_token="token-1", refresh_token="refresh-1", http=MagicMock())
    return session
