"""Interest evaluation API endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_evaluation_service
from src.schemas.evaluation_schemas import EvaluationRequest, EvaluationResult
from src.services.evaluation_service import EvaluationService

router = APIRouter(prefix="/evaluations", tags=["evaluations"])


@router.post(
    "",
    response_model=EvaluationResult,
    summary="Evaluate interests",
    description="Evaluate a profile and its chat answers into normalized interest scores and guidance."
)
async def evaluate(
    request: EvaluationRequest,
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
) -> EvaluationResult:
    """Run an interest evaluation."""
    return await evaluation_service.evaluate(request.profile, request.answers)
