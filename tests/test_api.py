"""
Tests for the console HTTP API.
"""
import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from recruiter_pipeline import main
from recruiter_pipeline.config import Settings
from recruiter_pipeline.main import PipelineServices, app


class FakeBackend:
    """Routes requests made through the shared HTTP session to canned responses."""

    def __init__(self, make_response, applicant_records):
        self.make_response = make_response
        self.routes = {
            ("GET", "/api/organization-jobpost"): lambda: make_response(200, {"jobs": [
                {"job_id": "job-1", "role": "Backend Engineer", "company": {"name": "Acme", "email": "hr@acme.io"}}
            ]}),
            ("GET", "/api/organization-jobpost/ongoing"): lambda: make_response(200, {"jobs": []}),
            ("GET", "/api/organization-jobpost/job-1/applicants"):
                lambda: make_response(200, {"applicants": applicant_records}),
            ("GET", "/api/organization-teams"): lambda: make_response(200, {"teams": [
                {"team_id": "t1", "team_name": "Platform"}
            ]}),
            ("POST", "/api/send-interview-form"): lambda: make_response(200, {"success": True}),
            ("POST", "/api/review-request"): lambda: make_response(200, {"success": True}),
            ("GET", "/api/interview-feedback/fb-1"): lambda: make_response(200, {"feedback": {
                "transcript": [{"role": "assistant", "text": "Hello", "timestamp": "2026-09-10T14:00:05Z"}],
                "evaluation": {"score": 70}
            }}),
        }
        self.calls = []

    def request(self, method, url, **kwargs):
        path = url.replace("https://api.test", "", 1)
        self.calls.append((method, path))
        handler = self.routes.get((method, path))
        if handler is None:
            return self.make_response(200, {"success": True})
        return handler()


@pytest.fixture
def backend(make_response, applicant_records):
    return FakeBackend(make_response, applicant_records)


@pytest.fixture
def services(backend, monkeypatch):
    config = Settings()
    config.api_base_url = "https://api.test"
    config.access_token = "token-1"
    config.refresh_token = "refresh-1"
    config.org_name = None
    config.org_email = None

    http = MagicMock()
    http.request.side_effect = backend.request
    pipeline_services = PipelineServices(config, http=http)
    monkeypatch.setattr(main, "services", pipeline_services)
    return pipeline_services


@pytest.fixture
def client(services):
    return TestClient(app)


@pytest.fixture
def selected(client):
    client.get("/jobs")
    response = client.post("/jobs/job-1/select")
    assert response.status_code == 200
    return response


def test_root(client):
    assert client.get("/").json() == {"status": "ok"}


def test_jobs_are_listed(client):
    response = client.get("/jobs")

    assert response.status_code == 200
    assert [job["job_id"] for job in response.json()] == ["job-1"]
    assert response.json()[0]["jobStatus"] == "open"


def test_select_job_returns_partitioned_pipeline(selected):
    """Test that the pipeline response has every bucket."""
    body = selected.json()

    assert body["job_id"] == "job-1"
    assert len(body["buckets"]) == 8
    assert body["counts"]["conduct_rounds"] == 1
    assert body["counts"]["pending"] == 1
    assert body["counts"]["invitation_sent"] == 1


def test_applicant_detail(client, selected):
    response = client.get("/applicants/alan@example.com")

    assert response.status_code == 200
    body = response.json()
    assert body["bucket"] == "invitation_sent"
    assert body["previous_rounds"][0]["average_score"] == 4.0
    assert body["previous_rounds"][0]["average_display"] == "4.0/5"
    assert body["previous_rounds"][0]["is_ai_interview"] is True


def test_unknown_applicant_is_404(client, selected):
    assert client.get("/applicants/nobody@example.com").status_code == 404


def test_status_update_is_sent_and_resynced(client, selected, backend):
    response = client.put("/applicants/ada@example.com/status", json={"status": "rejected"})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert ("PUT", "/api/organization-jobpost/job-1/applicant/ada@example.com/status") in backend.calls
    assert backend.calls[-1] == ("GET", "/api/organization-jobpost/job-1/applicants")


def test_ask_review_opens_review_draft(client, selected):
    response = client.put("/applicants/ada@example.com/status", json={"status": "ask_review"})

    assert response.json()["active_draft"] == {"kind": "review", "email": "ada@example.com"}


def test_invalid_status_is_400(client, selected):
    assert client.put("/applicants/ada@example.com/status", json={"status": "hired"}).status_code == 400


def test_schedule_validation_is_422(client, selected, backend):
    """Test that a non-AI draft without a location type is refused."""
    client.post("/applicants/ada@example.com/schedule")
    client.patch("/schedule", json={"round": "Technical Round 1"})

    response = client.post("/schedule/submit")

    assert response.status_code == 422
    assert response.json()["detail"] == "Please select interview location type (Online or Offline)"
    assert ("POST", "/api/send-interview-form") not in backend.calls


def test_schedule_submit(client, selected, backend):
    opened = client.post("/applicants/ada@example.com/schedule")
    assert opened.json()["teams"][0]["team_name"] == "Platform"
    client.patch("/schedule", json={"round": "Technical Round 1", "team": "Platform", "location_type": "online"})

    response = client.post("/schedule/submit")

    assert response.status_code == 200
    assert ("POST", "/api/send-interview-form") in backend.calls


def test_scheduling_invited_applicant_is_409(client, selected):
    assert client.post("/applicants/alan@example.com/schedule").status_code == 409


def test_offer_without_file_is_422(client, selected):
    response = client.post("/applicants/ada@example.com/offer")

    assert response.status_code == 422
    assert response.json()["detail"] == "Please select an offer letter file"


def test_offer_upload(client, selected, backend):
    response = client.post(
        "/applicants/ada@example.com/offer",
        files={"offer_letter": ("offer.pdf", b"%PDF-1.4", "application/pdf")}
    )

    assert response.status_code == 200
    assert ("POST", "/api/send-offer-letter") in backend.calls


def test_review_request_chain(client, selected, backend):
    response = client.post("/applicants/ada@example.com/review", json={"reviewer_email": "rev@partner.io"})

    assert response.status_code == 200
    review_index = backend.calls.index(("POST", "/api/review-request"))
    status_index = backend.calls.index(
        ("PUT", "/api/organization-jobpost/job-1/applicant/ada@example.com/status")
    )
    assert review_index < status_index < len(backend.calls) - 1
    assert backend.calls[-1] == ("GET", "/api/organization-jobpost/job-1/applicants")


def test_transcript_export(client):
    response = client.get("/transcripts/fb-1/export")

    assert response.status_code == 200
    assert "attachment" in response.headers["content-disposition"]
    assert "[14:00:05] AI Interviewer: Hello" in response.text
    assert "Score: 70/100" in response.text


def test_expired_session_is_401(client, services, backend, make_response):
    """Test that a failed token refresh surfaces as 401 and clears the session."""
    backend.routes[("GET", "/api/organization-jobpost")] = lambda: make_response(401)
    services.auth.http.post.return_value = make_response(401)

    response = client.get("/jobs")

    assert response.status_code == 401
    assert services.state.logged_out
    assert not services.auth.is_authenticated
    assert client.get("/pipeline").json()["logged_out"] is True


def test_notifications_are_drained(client, selected):
    client.put("/applicants/ada@example.com/status", json={"status": "rejected"})

    first = client.get("/notifications").json()
    second = client.get("/notifications").json()

    assert first[-1]["message"] == "Status updated to Rejected"
    assert second == []
