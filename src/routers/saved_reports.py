"""Saved psychometric report API endpoints.

All endpoints act on the authenticated user's own saved reports.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from src.api.dependencies import get_current_user_id, get_saved_report_service
from src.schemas.base import DeleteResponse
from src.schemas.saved_report_schemas import (
    SaveReportRequest,
    SavedReportResponse,
    SavedStatusResponse,
)
from src.services.saved_report_service import SavedReportService
from src.utils.exceptions import ResourceNotFoundError

router = APIRouter(prefix="/saved-reports", tags=["saved-reports"])


@router.post(
    "",
    response_model=SavedReportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a session report",
)
async def save_report(
    request: SaveReportRequest,
    user_id: str = Depends(get_current_user_id),
    service: SavedReportService = Depends(get_saved_report_service),
) -> SavedReportResponse:
    """Save a completed session's report, or retitle an existing one."""
    report = await service.save_report(user_id, request.session_id, request.report_title)
    return SavedReportResponse.from_document(report)


@router.get("", response_model=List[SavedReportResponse], summary="List saved reports")
async def list_saved_reports(
    user_id: str = Depends(get_current_user_id),
    service: SavedReportService = Depends(get_saved_report_service),
) -> List[SavedReportResponse]:
    reports = await service.get_user_saved_reports(user_id)
    return [SavedReportResponse.from_document(report) for report in reports]


@router.get(
    "/{session_id}/status",
    response_model=SavedStatusResponse,
    summary="Check whether a session report is saved",
)
async def saved_status(
    session_id: str = Path(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: SavedReportService = Depends(get_saved_report_service),
) -> SavedStatusResponse:
    saved = await service.is_report_saved(user_id, session_id)
    return SavedStatusResponse(session_id=session_id, saved=saved)


@router.get("/{session_id}", response_model=SavedReportResponse, summary="Get a saved report")
async def get_saved_report(
    session_id: str = Path(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: SavedReportService = Depends(get_saved_report_service),
) -> SavedReportResponse:
    report = await service.get_saved_report(user_id, session_id)
    if report is None:
        raise ResourceNotFoundError(
            "Saved report not found",
            resource_type="saved_report",
            resource_id=session_id,
        )
    return SavedReportResponse.from_document(report)


@router.delete("/{session_id}", response_model=DeleteResponse, summary="Delete a saved report")
async def delete_saved_report(
    session_id: str = Path(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
    service: SavedReportService = Depends(get_saved_report_service),
) -> DeleteResponse:
    deleted = await service.delete_saved_report(user_id, session_id)
    return DeleteResponse(deleted=deleted)
