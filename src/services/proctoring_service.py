"""Proctoring service for recording and summarizing test violations."""

from collections import Counter
from typing import Dict, List, Optional

from src.database.repositories import ProctoringViolationRepository
from src.models.psychometric import ProctoringViolation, ViolationSeverity
from src.utils.datetime_utils import utc_now
from src.utils.logger import get_logger

logger = get_logger(__name__)


class ProctoringService:
    """Service for proctoring violations."""

    def __init__(self, violation_repository: ProctoringViolationRepository):
        self.violations = violation_repository

    async def log_violation(
        self,
        session_id: str,
        violation_type: str,
        user_id: Optional[str] = None,
        severity: Optional[ViolationSeverity] = None,
        description: Optional[str] = None,
        snapshot_url: Optional[str] = None,
    ) -> ProctoringViolation:
        """Record a violation stamped with the current time.

        Args:
            session_id: Session the violation happened in
            violation_type: Kind of violation
            user_id: Candidate, when known
            severity: Severity, MEDIUM when omitted
            description: Free-form details
            snapshot_url: Link to a captured snapshot

        Returns:
            ProctoringViolation: Stored violation
        """
        violation = ProctoringViolation(
            session_id=session_id,
            user_id=user_id,
            violation_type=violation_type,
            severity=severity or ViolationSeverity.MEDIUM,
            description=description,
            snapshot_url=snapshot_url,
            timestamp=utc_now(),
        )
        saved = await self.violations.save(violation)

        logger.info(
            "Proctoring violation recorded",
            extra={
                "session_id": session_id,
                "violation_type": violation_type,
                "severity": saved.severity,
            }
        )
        return saved

    async def get_session_violations(self, session_id: str) -> List[ProctoringViolation]:
        """List a session's violations, newest first."""
        return await self.violations.find_by_session_id_order_by_timestamp_desc(session_id)

    async def get_violation_stats(self, session_id: str) -> Dict[str, int]:
        """Count a session's violations per violation type."""
        violations = await self.violations.find_by_session_id(session_id)
        return dict(Counter(v.violation_type for v in violations))

    async def get_total_violation_count(self, session_id: str) -> int:
        """Count all violations recorded for a session."""
        return await self.violations.count_by_session_id(session_id)

    async def get_user_violations(self, user_id: str) -> List[ProctoringViolation]:
        """List a user's violations across sessions, newest first."""
        return await self.violations.find_by_user_id_order_by_timestamp_desc(user_id)

    async def delete_session_violations(self, session_id: str) -> int:
        """Delete all violations for a session.

        Returns:
            int: Number of removed violations
        """
        deleted = await self.violations.delete_by_session_id(session_id)
        logger.info(
            "Session violations deleted",
            extra={"session_id": session_id, "deleted": deleted}
        )
        return deleted
