"""Profile service for reading and removing stored profiles."""

from typing import List

from src.database.repositories import ProfileRepository
from src.models.profile import Profile
from src.utils.exceptions import ResourceNotFoundError, UnauthorizedError
from src.utils.logger import get_logger, log_security_event

logger = get_logger(__name__)


class ProfileService:
    """Service for profile operations."""

    def __init__(self, profile_repository: ProfileRepository):
        self.profiles = profile_repository

    async def get_profile(self, profile_id: str) -> Profile:
        """Get a profile by id.

        Raises:
            ResourceNotFoundError: If no profile has this id
        """
        profile = await self.profiles.find_by_id(profile_id)
        if profile is None:
            raise ResourceNotFoundError(
                "Profile not found",
                resource_type="profile",
                resource_id=profile_id,
            )
        return profile

    async def list_user_profiles(self, user_id: str) -> List[Profile]:
        """List a user's profiles, newest first."""
        return await self.profiles.find_by_user_id(user_id)

    async def delete_profile(self, profile_id: str, user_id: str) -> None:
        """Delete a profile owned by the user.

        Args:
            profile_id: Profile to delete
            user_id: Requesting user

        Raises:
            ResourceNotFoundError: If no profile has this id
            UnauthorizedError: If the profile belongs to another user
        """
        profile = await self.get_profile(profile_id)

        if profile.user_id != user_id:
            log_security_event(
                "profile_delete_denied",
                {"profile_id": profile_id, "user_id": user_id},
                severity="WARNING",
            )
            raise UnauthorizedError("You are not allowed to delete this profile")

        await self.profiles.delete_by_id(profile_id)
        logger.info("Profile deleted", extra={"profile_id": profile_id, "user_id": user_id})
