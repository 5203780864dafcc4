"""Pydantic schemas for the profiling API.

This module provides the request/response schemas used for validation,
serialization and API documentation.
"""

from src.schemas.base import BaseSchema, DeleteResponse, ErrorResponse
from src.schemas.evaluation_schemas import (
    EvaluationRequest,
    EvaluationResult,
    UserProfileInput,
)
from src.schemas.proctoring_schemas import (
    LogViolationRequest,
    ViolationResponse,
    ViolationStatsResponse,
)
from src.schemas.profile_schemas import ProfileResponse
from src.schemas.saved_report_schemas import (
    SaveReportRequest,
    SavedReportResponse,
    SavedStatusResponse,
)
from src.schemas.score_schemas import NormalizeScoresRequest, NormalizeScoresResponse

__all__ = [
    "BaseSchema",
    "DeleteResponse",
    "ErrorResponse",
    "EvaluationRequest",
    "EvaluationResult",
    "UserProfileInput",
    "LogViolationRequest",
    "ViolationResponse",
    "ViolationStatsResponse",
    "ProfileResponse",
    "SaveReportRequest",
    "SavedReportResponse",
    "SavedStatusResponse",
    "NormalizeScoresRequest",
    "NormalizeScoresResponse",
]
