"""Profile API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from src.api.dependencies import get_current_user_id, get_profile_service
from src.schemas.profile_schemas import ProfileResponse
from src.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=List[ProfileResponse], summary="List my profiles")
async def list_profiles(
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> List[ProfileResponse]:
    profiles = await service.list_user_profiles(user_id)
    return [ProfileResponse.from_document(profile) for profile in profiles]


@router.get("/{profile_id}", response_model=ProfileResponse, summary="Get a profile")
async def get_profile(
    profile_id: str = Path(..., min_length=1),
    _user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await service.get_profile(profile_id)
    return ProfileResponse.from_document(profile)


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete one of my profiles",
)
async def delete_profile(
    profile_id: str = Path(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> Response:
    await service.delete_profile(profile_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
