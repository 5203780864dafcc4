"""Unit tests for ProctoringService."""

from unittest.mock import AsyncMock, Mock

import pytest

from src.database.repositories import ProctoringViolationRepository
from src.models.psychometric import ProctoringViolation, ViolationSeverity
from src.services.proctoring_service import ProctoringService


class TestProctoringService:
    """Test suite for ProctoringService."""

    @pytest.fixture
    def repository(self):
        repository = Mock(spec=ProctoringViolationRepository)
        repository.save = AsyncMock(side_effect=lambda violation: violation)
        repository.find_by_session_id = AsyncMock(return_value=[])
        repository.find_by_session_id_order_by_timestamp_desc = AsyncMock(return_value=[])
        repository.find_by_user_id_order_by_timestamp_desc = AsyncMock(return_value=[])
        repository.count_by_session_id = AsyncMock(return_value=0)
        repository.delete_by_session_id = AsyncMock(return_value=0)
        return repository

    @pytest.fixture
    def service(self, repository):
        return ProctoringService(repository)

    @pytest.mark.asyncio
    async def test_log_violation_defaults(self, service, repository):
        violation = await service.log_violation("session-1", "TAB_SWITCH")

        assert violation.session_id == "session-1"
        assert violation.violation_type == "TAB_SWITCH"
        assert violation.severity == ViolationSeverity.MEDIUM
        assert violation.timestamp.tzinfo is not None
        repository.save.assert_awaited_once_with(violation)

    @pytest.mark.asyncio
    async def test_log_violation_with_details(self, service):
        violation = await service.log_violation(
            "session-1",
            "NO_FACE",
            user_id="user-1",
            severity=ViolationSeverity.HIGH,
            description="Face not visible for 10s",
        )

        assert violation.severity == "HIGH"
        assert violation.user_id == "user-1"
        assert violation.description == "Face not visible for 10s"

    @pytest.mark.asyncio
    async def test_violation_stats(self, service, repository):
        repository.find_by_session_id.return_value = [
            ProctoringViolation(session_id="session-1", violation_type=kind)
            for kind in ("TAB_SWITCH", "NO_FACE", "TAB_SWITCH")
        ]

        stats = await service.get_violation_stats("session-1")

        assert stats == {"TAB_SWITCH": 2, "NO_FACE": 1}

    @pytest.mark.asyncio
    async def test_stats_for_clean_session(self, service):
        assert await service.get_violation_stats("session-1") == {}

    @pytest.mark.asyncio
    async def test_queries_delegate_to_repository(self, service, repository):
        repository.count_by_session_id.return_value = 4
        repository.delete_by_session_id.return_value = 4

        assert await service.get_total_violation_count("session-1") == 4
        assert await service.get_session_violations("session-1") == []
        assert await service.get_user_violations("user-1") == []
        assert await service.delete_session_violations("session-1") == 4

        repository.find_by_user_id_order_by_timestamp_desc.assert_awaited_once_with("user-1")
