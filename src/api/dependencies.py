"""Common dependencies for FastAPI routes.

This module provides bearer-token authentication and the service instances
injected into the routers. Tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.config import get_settings
from src.core.security import JWTManager, jwt_manager
from src.database.repositories import (
    ProctoringViolationRepository,
    ProfileRepository,
    PsychometricSessionRepository,
    SavedReportRepository,
)
from src.llm.base_llm import InterestEvaluator
from src.llm.openai_llm import OpenAIInterestEvaluator
from src.services.evaluation_service import EvaluationService
from src.services.proctoring_service import ProctoringService
from src.services.profile_service import ProfileService
from src.services.saved_report_service import SavedReportService
from src.utils.exceptions import UnauthorizedError
from src.utils.logger import get_logger, log_security_event

logger = get_logger(__name__)

# Security scheme for JWT tokens
security = HTTPBearer(auto_error=False)


def get_request_id(request: Request) -> str:
    """Get request ID from request state."""
    return getattr(request.state, "request_id", "unknown")


def get_jwt_manager() -> JWTManager:
    """Get the JWT manager used to verify bearer tokens."""
    return jwt_manager


# Authentication dependencies
async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    manager: JWTManager = Depends(get_jwt_manager),
) -> str:
    """Get the authenticated user's id from the bearer token.

    Args:
        request: FastAPI request object
        credentials: Bearer credentials from the Authorization header
        manager: JWT manager

    Returns:
        str: User id (the token subject)

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")

    try:
        user_id = manager.extract_user_id(credentials.credentials)
    except UnauthorizedError as e:
        log_security_event(
            "invalid_token",
            {"path": request.url.path, "reason": e.message},
            severity="WARNING",
        )
        raise

    request.state.user_id = user_id
    return user_id


async def get_optional_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    manager: JWTManager = Depends(get_jwt_manager),
) -> Optional[str]:
    """Get the user id when a valid bearer token is present.

    Returns:
        Optional[str]: User id, or None for anonymous or invalid tokens
    """
    if credentials is None or not manager.validate_token(credentials.credentials):
        return None
    return manager.extract_user_id(credentials.credentials)


# Repository dependencies
def get_profile_repository() -> ProfileRepository:
    return ProfileRepository()


def get_session_repository() -> PsychometricSessionRepository:
    return PsychometricSessionRepository()


def get_saved_report_repository() -> SavedReportRepository:
    return SavedReportRepository()


def get_violation_repository() -> ProctoringViolationRepository:
    return ProctoringViolationRepository()


# Service dependencies
@lru_cache()
def get_interest_evaluator() -> InterestEvaluator:
    """Get the shared interest evaluator configured from settings."""
    settings = get_settings()
    return OpenAIInterestEvaluator(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL,
        temperature=settings.OPENAI_TEMPERATURE,
        timeout=settings.OPENAI_TIMEOUT,
    )


def get_evaluation_service(
    evaluator: InterestEvaluator = Depends(get_interest_evaluator),
) -> EvaluationService:
    return EvaluationService(evaluator)


def get_saved_report_service(
    saved_reports: SavedReportRepository = Depends(get_saved_report_repository),
    sessions: PsychometricSessionRepository = Depends(get_session_repository),
) -> SavedReportService:
    return SavedReportService(saved_reports, sessions)


def get_proctoring_service(
    violations: ProctoringViolationRepository = Depends(get_violation_repository),
) -> ProctoringService:
    return ProctoringService(violations)


def get_profile_service(
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> ProfileService:
    return ProfileService(profiles)


__all__ = [
    "get_request_id",
    "get_jwt_manager",
    "get_current_user_id",
    "get_optional_user_id",
    "get_interest_evaluator",
    "get_evaluation_service",
    "get_saved_report_service",
    "get_proctoring_service",
    "get_profile_service",
]
