"""Proctoring API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, status

from src.api.dependencies import (
    get_current_user_id,
    get_optional_user_id,
    get_proctoring_service,
)
from src.schemas.base import DeleteResponse
from src.schemas.proctoring_schemas import (
    LogViolationRequest,
    ViolationResponse,
    ViolationStatsResponse,
)
from src.services.proctoring_service import ProctoringService

router = APIRouter(prefix="/proctoring", tags=["proctoring"])


@router.post(
    "/violations",
    response_model=ViolationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a proctoring violation",
)
async def log_violation(
    request: LogViolationRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    service: ProctoringService = Depends(get_proctoring_service),
) -> ViolationResponse:
    """Record a violation; the candidate is attached when a valid token is sent."""
    violation = await service.log_violation(
        session_id=request.session_id,
        violation_type=request.violation_type,
        user_id=user_id,
        severity=request.severity,
        description=request.description,
        snapshot_url=request.snapshot_url,
    )
    return ViolationResponse.from_document(violation)


@router.get(
    "/sessions/{session_id}/violations",
    response_model=List[ViolationResponse],
    summary="List a session's violations",
)
async def session_violations(
    session_id: str = Path(..., min_length=1),
    _user_id: str = Depends(get_current_user_id),
    service: ProctoringService = Depends(get_proctoring_service),
) -> List[ViolationResponse]:
    violations = await service.get_session_violations(session_id)
    return [ViolationResponse.from_document(v) for v in violations]


@router.get(
    "/sessions/{session_id}/stats",
    response_model=ViolationStatsResponse,
    summary="Count a session's violations by type",
)
async def session_violation_stats(
    session_id: str = Path(..., min_length=1),
    _user_id: str = Depends(get_current_user_id),
    service: ProctoringService = Depends(get_proctoring_service),
) -> ViolationStatsResponse:
    by_type = await service.get_violation_stats(session_id)
    total = await service.get_total_violation_count(session_id)
    return ViolationStatsResponse(session_id=session_id, total=total, by_type=by_type)


@router.delete(
    "/sessions/{session_id}/violations",
    response_model=DeleteResponse,
    summary="Delete a session's violations",
)
async def delete_session_violations(
    session_id: str = Path(..., min_length=1),
    _user_id: str = Depends(get_current_user_id),
    service: ProctoringService = Depends(get_proctoring_service),
) -> DeleteResponse:
    deleted = await service.delete_session_violations(session_id)
    return DeleteResponse(deleted=deleted)


@router.get(
    "/users/me/violations",
    response_model=List[ViolationResponse],
    summary="List the current user's violations",
)
async def my_violations(
    user_id: str = Depends(get_current_user_id),
    service: ProctoringService = Depends(get_proctoring_service),
) -> List[ViolationResponse]:
    violations = await service.get_user_violations(user_id)
    return [ViolationResponse.from_document(v) for v in violations]
