"""Saved psychometric report schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.models.psychometric import SavedPsychometricReport
from src.schemas.base import BaseSchema


class SaveReportRequest(BaseSchema):
    """Request to save a session's report."""

    session_id: str = Field(..., min_length=1, description="Psychometric session id")
    report_title: Optional[str] = Field(None, max_length=200, description="Optional title")


class SavedReportResponse(BaseSchema):
    """A saved report as returned by the API."""

    id: Optional[str] = None
    user_id: str
    session_id: str
    user_email: Optional[str] = None
    candidate_name: Optional[str] = None
    report_title: Optional[str] = None
    saved_at: datetime

    @classmethod
    def from_document(cls, report: SavedPsychometricReport) -> "SavedReportResponse":
        """Build the response from a stored report."""
        return cls(
            id=report.id_str,
            user_id=report.user_id,
            session_id=report.session_id,
            user_email=report.user_email,
            candidate_name=report.candidate_name,
            report_title=report.report_title,
            saved_at=report.saved_at,
        )


class SavedStatusResponse(BaseSchema):
    """Whether the user saved a session's report."""

    session_id: str
    saved: bool
