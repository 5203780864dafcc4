"""Unit tests for SavedReportService."""

from unittest.mock import AsyncMock, Mock

import pytest
from bson import ObjectId

from src.database.repositories import PsychometricSessionRepository, SavedReportRepository
from src.models.psychometric import (
    PsychometricSession,
    SavedPsychometricReport,
    SessionStatus,
    UserInfo,
)
from src.services.saved_report_service import SavedReportService
from src.utils.exceptions import BadRequestError, ResourceNotFoundError


def make_session(status=SessionStatus.COMPLETED):
    """Psychometric session with valid candidate details."""
    return PsychometricSession(
        _id=ObjectId(),
        status=status,
        user_info=UserInfo(
            name="Asha Rao",
            email="asha@example.com",
            phone="9876543210",
            age=21,
            degree="B.Tech",
            specialization="CSE",
            career_interest="Software",
        ),
    )


class TestSavedReportService:
    """Test suite for SavedReportService."""

    @pytest.fixture
    def saved_reports(self):
        repository = Mock(spec=SavedReportRepository)
        repository.find_by_user_id_and_session_id = AsyncMock(return_value=None)
        repository.find_by_user_id_order_by_saved_at_desc = AsyncMock(return_value=[])
        repository.exists_by_user_id_and_session_id = AsyncMock(return_value=False)
        repository.delete_by_user_id_and_session_id = AsyncMock(return_value=0)
        repository.save = AsyncMock(side_effect=lambda report: report)
        return repository

    @pytest.fixture
    def sessions(self):
        repository = Mock(spec=PsychometricSessionRepository)
        repository.find_by_id = AsyncMock(return_value=None)
        return repository

    @pytest.fixture
    def service(self, saved_reports, sessions):
        return SavedReportService(saved_reports, sessions)

    @pytest.mark.asyncio
    async def test_save_completed_session(self, service, saved_reports, sessions):
        session = make_session()
        sessions.find_by_id.return_value = session

        report = await service.save_report("user-1", session.id_str, "My report")

        assert report.user_id == "user-1"
        assert report.session_id == session.id_str
        assert report.user_email == "asha@example.com"
        assert report.candidate_name == "Asha Rao"
        assert report.report_title == "My report"
        assert report.saved_at.tzinfo is not None
        saved_reports.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_save_missing_session(self, service):
        with pytest.raises(ResourceNotFoundError, match="Session not found: abc"):
            await service.save_report("user-1", "abc")

    @pytest.mark.asyncio
    async def test_save_incomplete_session(self, service, saved_reports, sessions):
        sessions.find_by_id.return_value = make_session(SessionStatus.IN_PROGRESS)

        with pytest.raises(BadRequestError, match="incomplete session"):
            await service.save_report("user-1", "session-1")

        saved_reports.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_save_again_returns_existing(self, service, saved_reports, sessions):
        existing = SavedPsychometricReport(user_id="user-1", session_id="s-1", report_title="Old")
        saved_reports.find_by_user_id_and_session_id.return_value = existing

        report = await service.save_report("user-1", "s-1")

        assert report is existing
        assert report.report_title == "Old"
        saved_reports.save.assert_not_awaited()
        sessions.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_save_again_updates_title(self, service, saved_reports):
        existing = SavedPsychometricReport(user_id="user-1", session_id="s-1", report_title="Old")
        saved_reports.find_by_user_id_and_session_id.return_value = existing

        report = await service.save_report("user-1", "s-1", "New")

        assert report.report_title == "New"
        saved_reports.save.assert_awaited_once_with(existing)

    @pytest.mark.asyncio
    async def test_queries_delegate_to_repository(self, service, saved_reports):
        saved_reports.exists_by_user_id_and_session_id.return_value = True
        saved_reports.delete_by_user_id_and_session_id.return_value = 1

        assert await service.is_report_saved("user-1", "s-1") is True
        assert await service.get_user_saved_reports("user-1") == []
        assert await service.get_saved_report("user-1", "s-1") is None
        assert await service.delete_saved_report("user-1", "s-1") == 1

        saved_reports.find_by_user_id_order_by_saved_at_desc.assert_awaited_once_with("user-1")
