"""Saved report service.

Users can bookmark the report of a completed psychometric session. A user has
at most one saved record per session; saving again only updates its title.
"""

from typing import List, Optional

from src.database.repositories import PsychometricSessionRepository, SavedReportRepository
from src.models.psychometric import SavedPsychometricReport, SessionStatus
from src.utils.datetime_utils import utc_now
from src.utils.exceptions import BadRequestError, ResourceNotFoundError
from src.utils.logger import get_logger

logger = get_logger(__name__)


class SavedReportService:
    """Service for saving and listing psychometric reports."""

    def __init__(
        self,
        saved_report_repository: SavedReportRepository,
        session_repository: PsychometricSessionRepository,
    ):
        self.saved_reports = saved_report_repository
        self.sessions = session_repository

    async def save_report(
        self, user_id: str, session_id: str, report_title: Optional[str] = None
    ) -> SavedPsychometricReport:
        """Save a session's report for a user.

        Args:
            user_id: Owner of the saved record
            session_id: Psychometric session id
            report_title: Optional display title

        Returns:
            SavedPsychometricReport: New or existing saved record

        Raises:
            ResourceNotFoundError: If the session does not exist
            BadRequestError: If the session is not completed
        """
        existing = await self.saved_reports.find_by_user_id_and_session_id(user_id, session_id)
        if existing is not None:
            if report_title:
                existing.report_title = report_title
                return await self.saved_reports.save(existing)
            return existing

        session = await self.sessions.find_by_id(session_id)
        if session is None:
            raise ResourceNotFoundError(
                f"Session not found: {session_id}",
                resource_type="psychometric_session",
                resource_id=session_id,
            )

        if session.status != SessionStatus.COMPLETED:
            logger.warning(
                "Attempt to save report for incomplete session",
                extra={"session_id": session_id, "status": session.status}
            )
            raise BadRequestError("Cannot save report for incomplete session")

        report = SavedPsychometricReport(
            user_id=user_id,
            session_id=session_id,
            user_email=session.user_info.email,
            candidate_name=session.user_info.name,
            report_title=report_title,
            saved_at=utc_now(),
        )
        saved = await self.saved_reports.save(report)

        logger.info(
            "Psychometric report saved",
            extra={"user_id": user_id, "session_id": session_id}
        )
        return saved

    async def get_user_saved_reports(self, user_id: str) -> List[SavedPsychometricReport]:
        """List a user's saved reports, most recent first."""
        return await self.saved_reports.find_by_user_id_order_by_saved_at_desc(user_id)

    async def is_report_saved(self, user_id: str, session_id: str) -> bool:
        """Check whether a user saved a session's report."""
        return await self.saved_reports.exists_by_user_id_and_session_id(user_id, session_id)

    async def get_saved_report(
        self, user_id: str, session_id: str
    ) -> Optional[SavedPsychometricReport]:
        """Get a user's saved record for a session, if any."""
        return await self.saved_reports.find_by_user_id_and_session_id(user_id, session_id)

    async def delete_saved_report(self, user_id: str, session_id: str) -> int:
        """Delete a user's saved record for a session.

        Returns:
            int: Number of removed records
        """
        deleted = await self.saved_reports.delete_by_user_id_and_session_id(user_id, session_id)
        logger.info(
            "Saved report deleted",
            extra={"user_id": user_id, "session_id": session_id, "deleted": deleted}
        )
        return deleted
