"""Application-wide constants and configuration values."""

# Interview rounds offered when scheduling, in pipeline order
INITIAL_SCREENING_ROUND = "Initial Screening Round"

ROUND_OPTIONS = [
    INITIAL_SCREENING_ROUND,
    "Technical Round 1",
    "Technical Round 2",
    "Managerial Round",
    "Final Technical Round",
    "Discussion Round",
    "Negotiation/Offer Round",
]

LOCATION_TYPES = ["online", "offline"]
AI_LOCATION_TYPE = "ai_online"

# Meta-option of the status control that routes to a review request
ASK_REVIEW_OPTION = "ask_review"

STATUS_LABELS = {
    "decision_pending": "Decision Pending",
    "decision_pending_review": "Pending Review",
    "selected_for_interview": "Selected for Interview",
    "invitation_sent": "Invitation Sent",
    "processing": "Ongoing Rounds",
    "selected": "Selected",
    "offer_sent": "Offer Sent",
    "offer_accepted": "Offer Accepted",
    "rejected": "Rejected",
    ASK_REVIEW_OPTION: "Ask for Review",
}

# Interviewer feedback criteria, rated 1-5
FEEDBACK_CRITERIA = [
    "technical_configuration",
    "technical_customization",
    "communication_skills",
    "leadership_abilities",
    "enthusiasm",
    "teamwork",
    "attitude",
]

# Remote API paths
JOBPOST_PATH = "/api/organization-jobpost"
JOBPOST_ONGOING_PATH = "/api/organization-jobpost/ongoing"
JOB_APPLICANTS_PATH = "/api/organization-jobpost/{job_id}/applicants"
APPLICANT_STATUS_PATH = "/api/organization-jobpost/{job_id}/applicant/{email}/status"
SEND_INTERVIEW_FORM_PATH = "/api/send-interview-form"
SEND_OFFER_LETTER_PATH = "/api/send-offer-letter"
REVIEW_REQUEST_PATH = "/api/review-request"
INTERVIEW_FEEDBACK_PATH = "/api/interview-feedback/{feedback_id}"
CHECK_FEEDBACK_STATUS_PATH = "/api/check-feedback-status"
SUBMIT_FEEDBACK_PATH = "/api/submit-interview-feedback"
ORGANIZATION_TEAMS_PATH = "/api/organization-teams"
REFRESH_TOKEN_PATH = "/api/auth/refresh-token"
SERVE_FILE_PATH = "/api/serve-file"

# User-facing messages
MSG_SELECT_ROUND = "Please select an interview round"
MSG_SELECT_LOCATION_TYPE = "Please select interview location type (Online or Offline)"
MSG_SELECT_TEAM = "Please select a team"
MSG_SELECT_OFFER_FILE = "Please select an offer letter file"
MSG_ENTER_REVIEWER_EMAIL = "Please enter the reviewer's email"
MSG_SELECT_JOB = "Please select a job first"
MSG_FILL_FEEDBACK = "Please fill all required fields"
MSG_SELECT_ATTENDANCE = "Please select whether the candidate attended the interview"
MSG_SESSION_EXPIRED = "Session expired. Please log in again."
MSG_SUBMIT_IN_PROGRESS = "Already sending, please wait"
