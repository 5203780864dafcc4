"""Psychometric session, saved report and proctoring models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from src.models.base import BaseDocument, EmbeddedDocument
from src.utils.datetime_utils import utc_now


class SessionStatus(str, Enum):
    """Lifecycle of a psychometric test session."""

    CREATED = "CREATED"
    GENERATING = "GENERATING"
    # At least one section is ready while the rest are still generating
    PARTIAL_READY = "PARTIAL_READY"
    READY = "READY"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class ViolationSeverity(str, Enum):
    """Severity of a proctoring violation."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class UserInfo(EmbeddedDocument):
    """Candidate details captured when a session is created."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = Field(..., min_length=7, max_length=15)
    age: int = Field(..., ge=15, le=80)
    degree: str = Field(..., min_length=1)
    specialization: str = Field(..., min_length=1)
    career_interest: str = Field(..., min_length=1)
    gender: Optional[str] = Field(default=None, description="male, female, other or not_to_say")
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    interests: Optional[str] = None
    hobbies: Optional[str] = None
    certifications: Optional[str] = None
    achievements: Optional[str] = None


class TestResults(EmbeddedDocument):
    """Summary of a submitted test."""

    total_questions: int = 0
    attempted: int = 0
    not_attempted: int = 0
    correct: int = 0
    wrong: int = 0
    marked_for_review: int = 0
    answered_and_marked_for_review: int = 0
    submitted_at: Optional[str] = None


class PsychometricSession(BaseDocument):
    """A candidate's psychometric test session."""

    collection_name = "psychometric_sessions"

    user_info: UserInfo
    status: SessionStatus = SessionStatus.CREATED
    test_results: Optional[TestResults] = None
    aptitude_ready: bool = False
    behavioral_ready: bool = False
    domain_ready: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_completed(self) -> bool:
        """Whether the candidate has finished the test."""
        return self.status == SessionStatus.COMPLETED


class SavedPsychometricReport(BaseDocument):
    """Link between a user and a psychometric session report they saved."""

    collection_name = "saved_psychometric_reports"

    user_id: str
    session_id: str
    user_email: Optional[str] = None
    candidate_name: Optional[str] = None
    report_title: Optional[str] = None
    saved_at: datetime = Field(default_factory=utc_now)


class ProctoringViolation(BaseDocument):
    """A proctoring event recorded during a test session."""

    collection_name = "proctoring_violations"

    session_id: str
    user_id: Optional[str] = None
    violation_type: str
    severity: ViolationSeverity = ViolationSeverity.MEDIUM
    timestamp: datetime = Field(default_factory=utc_now)
    snapshot_url: Optional[str] = None
    description: Optional[str] = None
