"""Session state of the recruiter's pipeline view."""

import logging
import threading
from typing import List, Optional, Set

from recruiter_pipeline.models import (
    ActiveDraft,
    Applicant,
    DraftKind,
    Job,
    OfferDraft,
    ReviewDraft,
    ScheduleDraft,
    Team
)

logger = logging.getLogger(__name__)


class PipelineState:
    """Ephemeral state for one recruiter session.

    Holds the job list, the selected job and its applicants, the single open
    draft, and the set of applicants whose status update is in flight.
    Nothing here outlives the session.

    Attributes:
        jobs: Merged open and ongoing job postings.
        selected_job_id: Job whose applicants are shown, "" when none.
        applicants: Applicants of the selected job, in fetch order.
        load_error: Error from the last failed applicant load.
        active_draft: Which workflow draft is open, and for whom.
        teams: Team directory loaded when a schedule draft opens.
        logged_out: Set when authentication could not be recovered.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.jobs: List[Job] = []
        self.selected_job_id: str = ""
        self.applicants: List[Applicant] = []
        self.load_error: Optional[str] = None
        self.active_draft = ActiveDraft()
        self.schedule_draft: Optional[ScheduleDraft] = None
        self.offer_draft: Optional[OfferDraft] = None
        self.review_draft: Optional[ReviewDraft] = None
        self.teams: List[Team] = []
        self.updating_emails: Set[str] = set()
        self.logged_out = False

    # Job selection

    def select_job(self, job_id: str) -> None:
        """Switch the active job, discarding the previous job's applicants and drafts."""
        with self.lock:
            self.selected_job_id = job_id
            self.applicants = []
            self.load_error = None
            self.close_draft()

    def selected_job(self) -> Optional[Job]:
        with self.lock:
            for job in self.jobs:
                if job.job_id == self.selected_job_id:
                    return job
            return None

    def find_applicant(self, email: str) -> Optional[Applicant]:
        with self.lock:
            for applicant in self.applicants:
                if applicant.email == email:
                    return applicant
            return None

    def get_applicant(self, email: str) -> Applicant:
        """Return the applicant of the selected job with this email.

        Raises:
            ValueError: If no such applicant is loaded.
        """
        applicant = self.find_applicant(email)
        if applicant is None:
            raise ValueError(f"Applicant with email {email} not found")
        return applicant

    def replace_applicants(self, job_id: str, applicants: List[Applicant]) -> bool:
        """Install a fetched applicant list if it still belongs to the selected job.

        Returns:
            True if applied, False if the response was for a job that is no
            longer selected and was discarded.
        """
        with self.lock:
            if job_id != self.selected_job_id:
                logger.info(f"Discarding applicants for job {job_id}; job {self.selected_job_id} is selected")
                return False
            self.applicants = list(applicants)
            self.load_error = None
            return True

    def clear_applicants(self, job_id: str, error: Optional[str] = None) -> None:
        with self.lock:
            if job_id != self.selected_job_id:
                return
            self.applicants = []
            self.load_error = error

    # Drafts

    def open_draft(self, kind: DraftKind, email: str) -> None:
        """Open a draft for an applicant, closing whichever draft was open."""
        with self.lock:
            self.close_draft()
            self.active_draft = ActiveDraft(kind=kind, email=email)
            if kind == DraftKind.SCHEDULE:
                self.schedule_draft = ScheduleDraft()
            elif kind == DraftKind.OFFER:
                self.offer_draft = OfferDraft()
            elif kind == DraftKind.REVIEW:
                self.review_draft = ReviewDraft(applicant_email=email)

    def close_draft(self) -> None:
        with self.lock:
            self.active_draft = ActiveDraft()
            self.schedule_draft = None
            self.offer_draft = None
            self.review_draft = None

    def close_draft_for(self, kind: DraftKind, email: str) -> bool:
        """Close the open draft only if it is still this applicant's draft of this kind."""
        with self.lock:
            if not self.active_draft.is_open(kind, email):
                return False
            self.close_draft()
            return True

    def try_mark_submitting(self, draft) -> bool:
        """Mark a draft as being sent; False if a send is already outstanding."""
        with self.lock:
            if draft.submitting:
                return False
            draft.submitting = True
            return True

    def require_draft(self, kind: DraftKind) -> str:
        """Return the email the open draft of this kind belongs to.

        Raises:
            ValueError: If no draft of this kind is open.
        """
        with self.lock:
            if not self.active_draft.is_open(kind):
                raise ValueError(f"No {kind.value} draft is open")
            return self.active_draft.email

    # Per-applicant status locks

    def try_mark_updating(self, email: str) -> bool:
        with self.lock:
            if email in self.updating_emails:
                return False
            self.updating_emails.add(email)
            return True

    def clear_updating(self, email: str) -> None:
        with self.lock:
            self.updating_emails.discard(email)

    def is_updating(self, email: str) -> bool:
        with self.lock:
            return email in self.updating_emails

    def reset(self) -> None:
        """Drop all session state after a forced logout."""
        with self.lock:
            self.jobs = []
            self.select_job("")
            self.teams = []
            self.updating_emails = set()
            self.logged_out = True
