"""Pydantic models for workflow outcomes and user notifications."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class NotificationLevel(str, Enum):
    """Severity of a user-visible notification."""
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A message surfaced to the recruiter."""
    model_config = ConfigDict(use_enum_values=True)

    level: NotificationLevel
    message: str
    created_at: datetime = Field(default_factory=datetime.now)


class ErrorKind(str, Enum):
    """Error taxonomy for failed workflows."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    SERVER = "server"
    NETWORK = "network"


class WorkflowResult(BaseModel):
    """Outcome of a recruiter workflow.

    Attributes:
        success: True when the remote call (and its follow-ups) succeeded.
        message: User-facing message for the outcome.
        error_kind: Set on failure.
    """
    model_config = ConfigDict(use_enum_values=True)

    success: bool
    message: str = ""
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, message: str = "") -> "WorkflowResult":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, error_kind: ErrorKind, message: str) -> "WorkflowResult":
        return cls(success=False, error_kind=error_kind, message=message)
