"""Proctoring violation schemas."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import Field

from src.models.psychometric import ProctoringViolation, ViolationSeverity
from src.schemas.base import BaseSchema


class LogViolationRequest(BaseSchema):
    """A violation reported by the test client."""

    session_id: str = Field(..., min_length=1)
    violation_type: str = Field(..., min_length=1, description="e.g. TAB_SWITCH, NO_FACE")
    severity: Optional[ViolationSeverity] = Field(
        None, description="Defaults to MEDIUM when omitted"
    )
    snapshot_url: Optional[str] = None
    description: Optional[str] = Field(None, max_length=1000)


class ViolationResponse(BaseSchema):
    """A recorded violation."""

    id: Optional[str] = None
    session_id: str
    user_id: Optional[str] = None
    violation_type: str
    severity: str
    timestamp: datetime
    snapshot_url: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_document(cls, violation: ProctoringViolation) -> "ViolationResponse":
        """Build the response from a stored violation."""
        return cls(
            id=violation.id_str,
            session_id=violation.session_id,
            user_id=violation.user_id,
            violation_type=violation.violation_type,
            severity=violation.severity,
            timestamp=violation.timestamp,
            snapshot_url=violation.snapshot_url,
            description=violation.description,
        )


class ViolationStatsResponse(BaseSchema):
    """Violation counts for a session."""

    session_id: str
    total: int
    by_type: Dict[str, int]
