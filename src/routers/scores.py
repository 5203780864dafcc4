"""Score normalization API endpoints."""

from fastapi import APIRouter

from src.schemas.score_schemas import NormalizeScoresRequest, NormalizeScoresResponse
from src.utils.score_utils import normalize_scores, round_scores, scores_total

router = APIRouter(prefix="/scores", tags=["scores"])


@router.post(
    "/normalize",
    response_model=NormalizeScoresResponse,
    summary="Normalize category scores to 100",
    description="Scale raw category scores so they sum to 100, optionally rounding each value half-up."
)
async def normalize(request: NormalizeScoresRequest) -> NormalizeScoresResponse:
    """Normalize raw scores, rounding them when ``decimals`` is given."""
    normalized = normalize_scores(request.scores)
    if request.decimals is not None:
        normalized = round_scores(normalized, request.decimals)

    return NormalizeScoresResponse(scores=normalized, total=scores_total(normalized))
