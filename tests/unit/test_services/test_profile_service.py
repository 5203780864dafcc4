"""Unit tests for ProfileService."""

from unittest.mock import AsyncMock, Mock

import pytest
from bson import ObjectId

from src.database.repositories import ProfileRepository
from src.models.profile import Profile
from src.services.profile_service import ProfileService
from src.utils.exceptions import ResourceNotFoundError, UnauthorizedError


class TestProfileService:
    """Test suite for ProfileService."""

    @pytest.fixture
    def profile(self):
        return Profile(_id=ObjectId(), user_id="user-1", name="Asha")

    @pytest.fixture
    def repository(self, profile):
        repository = Mock(spec=ProfileRepository)
        repository.find_by_id = AsyncMock(return_value=profile)
        repository.find_by_user_id = AsyncMock(return_value=[profile])
        repository.delete_by_id = AsyncMock(return_value=True)
        return repository

    @pytest.fixture
    def service(self, repository):
        return ProfileService(repository)

    @pytest.mark.asyncio
    async def test_get_profile(self, service, profile):
        assert await service.get_profile(profile.id_str) is profile

    @pytest.mark.asyncio
    async def test_get_missing_profile(self, service, repository):
        repository.find_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError, match="Profile not found"):
            await service.get_profile("missing")

    @pytest.mark.asyncio
    async def test_list_user_profiles(self, service, repository, profile):
        assert await service.list_user_profiles("user-1") == [profile]
        repository.find_by_user_id.assert_awaited_once_with("user-1")

    @pytest.mark.asyncio
    async def test_delete_own_profile(self, service, repository, profile):
        await service.delete_profile(profile.id_str, "user-1")

        repository.delete_by_id.assert_awaited_once_with(profile.id_str)

    @pytest.mark.asyncio
    async def test_delete_other_users_profile(self, service, repository, profile):
        with pytest.raises(UnauthorizedError):
            await service.delete_profile(profile.id_str, "intruder")

        repository.delete_by_id.assert_not_awaited()
