"""
Tests for the job directory.
"""
import pytest
from unittest.mock import MagicMock

from recruiter_pipeline.remote.errors import ApiError, SessionExpiredError, TransportError
from recruiter_pipeline.services.job_service import JobService
from recruiter_pipeline.services.pipeline_state import PipelineState


@pytest.fixture
def job_repository():
    mock = MagicMock()
    mock.list_open_jobs.return_value = [
        {"job_id": "o1", "role": "Backend Engineer", "company": {"name": "Acme", "email": "hr@acme.io"}},
        {"job_id": "o2", "role": "Frontend Engineer"}
    ]
    mock.list_ongoing_jobs.return_value = [
        {"job_id": "g1", "role": "Data Engineer", "location": "Berlin"}
    ]
    return mock


@pytest.fixture
def job_service(job_repository):
    return JobService(job_repository, PipelineState())


def test_load_jobs_merges_open_then_ongoing(job_service):
    """Test that open jobs come first and each job is tagged with its source."""
    jobs = job_service.load_jobs()

    assert [job.job_id for job in jobs] == ["o1", "o2", "g1"]
    assert [job.jobStatus for job in jobs] == ["open", "open", "ongoing"]
    assert jobs[0].company.email == "hr@acme.io"
    assert job_service.state.jobs == jobs


@pytest.mark.parametrize("error", [ApiError(500, "boom"), TransportError("timeout")])
def test_failed_collection_is_treated_as_empty(job_service, job_repository, error):
    """Test that one failing collection does not hide the other."""
    job_repository.list_open_jobs.side_effect = error

    jobs = job_service.load_jobs()

    assert [job.job_id for job in jobs] == ["g1"]


def test_both_collections_failing_yields_empty_list(job_service, job_repository):
    """Test that the directory degrades to an empty list."""
    job_repository.list_open_jobs.side_effect = ApiError(503)
    job_repository.list_ongoing_jobs.side_effect = TransportError("down")

    assert job_service.load_jobs() == []


def test_integer_job_ids_are_stringified(job_service, job_repository):
    """Test that numeric ids from the backend are accepted."""
    job_repository.list_open_jobs.return_value = [{"job_id": 42, "role": "QA"}]
    job_repository.list_ongoing_jobs.return_value = []

    assert job_service.load_jobs()[0].job_id == "42"


def test_session_expiry_propagates(job_service, job_repository):
    """Test that a forced logout is not swallowed as an empty collection."""
    job_repository.list_ongoing_jobs.side_effect = SessionExpiredError("expired")

    with pytest.raises(SessionExpiredError):
        job_service.load_jobs()
