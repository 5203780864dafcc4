"""Interest evaluation service.

This module turns a user's profile and chat answers into an interest
evaluation. The LLM produces the raw scores and narrative; this service
validates its output, normalizes the interest scores to 100 and keeps the
pie chart consistent with them.
"""

import json
import math
from typing import Any, Dict, List, Mapping, Optional

from src.llm.base_llm import InterestEvaluator
from src.schemas.evaluation_schemas import EvaluationResult, UserProfileInput
from src.utils.answer_quality import collect_invalid_answers
from src.utils.exceptions import BadRequestError
from src.utils.json_utils import extract_json_from_text, is_valid_json
from src.utils.logger import PerformanceLogger, get_logger
from src.utils.score_utils import normalize_scores, round_scores

logger = get_logger(__name__)

# Pie chart values follow this order when the model returns all five labels
INTEREST_CATEGORIES = ("tech", "design", "management", "entrepreneurship", "research")

LIST_FIELDS = (
    "pie_chart_labels",
    "strengths",
    "weaknesses",
    "dos",
    "donts",
    "recommended_roles",
    "suggested_courses",
    "project_ideas",
)
TEXT_FIELDS = ("interest_persona", "roadmap_90_days", "summary")

SCORE_DECIMALS = 2


def _as_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class EvaluationService:
    """Service for evaluating user interests."""

    def __init__(self, evaluator: InterestEvaluator):
        """Initialize evaluation service.

        Args:
            evaluator: Provider that produces the raw evaluation
        """
        self.evaluator = evaluator

    async def evaluate(
        self,
        profile: Optional[UserProfileInput],
        answers: Optional[Mapping[str, Optional[str]]],
    ) -> EvaluationResult:
        """Evaluate a profile and its answers.

        Args:
            profile: User profile details
            answers: Answer per question

        Returns:
            EvaluationResult: Normalized evaluation with invalid answers attached

        Raises:
            BadRequestError: If input is missing or the model output is not
                a usable JSON object
            ExternalServiceError: If the LLM call fails
        """
        if profile is None:
            logger.warning("Evaluation requested with no user profile")
            raise BadRequestError("User profile is required")
        if not answers:
            logger.warning("Evaluation requested without answers")
            raise BadRequestError("Answers are required")

        invalid_answers = collect_invalid_answers(answers)

        with PerformanceLogger("interest_evaluation", logger=logger):
            raw_output = await self.evaluator.evaluate_interests(
                profile.to_prompt_data(), answers, invalid_answers
            )

        cleaned = extract_json_from_text(raw_output)
        if not is_valid_json(cleaned):
            logger.error("Invalid JSON response received from interest evaluator")
            raise BadRequestError("Invalid response received from AI service")

        result = self.parse_evaluation(cleaned)

        if result.interests is not None:
            normalized = round_scores(normalize_scores(result.interests), SCORE_DECIMALS)
            result.interests = normalized

            if result.pie_chart_labels is not None and len(result.pie_chart_labels) == len(INTEREST_CATEGORIES):
                result.pie_chart_values = [
                    normalized.get(category, 0.0) for category in INTEREST_CATEGORIES
                ]

        result.invalid_answers = invalid_answers

        logger.info(
            "Interest evaluation completed",
            extra={
                "answer_count": len(answers),
                "invalid_answer_count": len(invalid_answers),
            }
        )
        return result

    @staticmethod
    def parse_evaluation(json_text: str) -> EvaluationResult:
        """Parse the model's JSON into an ``EvaluationResult``.

        Unknown fields are ignored and non-numeric or non-finite scores count
        as zero.

        Raises:
            BadRequestError: If the JSON is not an object
        """
        root = json.loads(json_text)
        if not isinstance(root, dict):
            logger.error("Evaluation JSON is not an object", extra={"type": type(root).__name__})
            raise BadRequestError("Failed to parse evaluation result")

        data: Dict[str, Any] = {}

        if "interests" in root:
            node = root["interests"]
            interests: Dict[str, float] = {}
            if isinstance(node, dict):
                for category in INTEREST_CATEGORIES:
                    if category in node:
                        interests[category] = _as_float(node[category])
            data["interests"] = interests

        if "pie_chart_values" in root:
            data["pie_chart_values"] = [_as_float(v) for v in _as_list(root["pie_chart_values"])]

        for field in LIST_FIELDS:
            if field in root:
                data[field] = [_as_text(v) for v in _as_list(root[field])]

        for field in TEXT_FIELDS:
            if field in root:
                data[field] = _as_text(root[field])

        return EvaluationResult(**data)
