"""Score normalization request and response schemas."""

from typing import Annotated, Dict, Optional

from pydantic import Field, FiniteFloat, StringConstraints

from src.schemas.base import BaseSchema

CategoryLabel = Annotated[str, StringConstraints(min_length=1)]


class NormalizeScoresRequest(BaseSchema):
    """Raw category scores to normalize."""

    scores: Dict[CategoryLabel, FiniteFloat] = Field(
        ..., description="Finite raw score per non-empty category label"
    )
    decimals: Optional[int] = Field(
        None, ge=0, le=10, description="Round normalized values to this many decimals"
    )

    model_config = {
        **BaseSchema.model_config,
        "json_schema_extra": {
            "example": {
                "scores": {"tech": 40, "design": 30, "research": 30},
                "decimals": 2,
            }
        },
    }


class NormalizeScoresResponse(BaseSchema):
    """Normalized scores and their sum."""

    scores: Dict[str, float] = Field(..., description="Normalized score per category label")
    total: float = Field(..., description="Sum of the normalized scores")
