"""Pydantic models for job postings and organization teams."""

from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from enum import Enum


class JobStatus(str, Enum):
    """Which backend collection a job posting was fetched from."""
    OPEN = "open"
    ONGOING = "ongoing"


class Company(BaseModel):
    """Company that owns a job posting."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None


class Job(BaseModel):
    """Represents a job posting the recruiter can select.

    Attributes:
        job_id: Unique job identifier.
        role: Job title/position.
        location: Job location.
        company: Company name and contact email.
        jobStatus: Collection the job came from, tagged at merge time.
    """
    model_config = ConfigDict(extra="allow", use_enum_values=True)

    job_id: str
    role: Optional[str] = None
    location: Optional[str] = None
    company: Optional[Company] = None
    jobStatus: Optional[JobStatus] = None

    @field_validator("job_id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        return str(value) if isinstance(value, int) else value


class Team(BaseModel):
    """An organization team interviews can be routed to."""
    model_config = ConfigDict(extra="allow")

    team_id: str
    team_name: str

    @field_validator("team_id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        return str(value) if isinstance(value, int) else value
