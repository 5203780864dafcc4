"""Unit tests for EvaluationService.

The LLM provider is replaced with an AsyncMock returning canned completions.
"""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from src.llm.base_llm import InterestEvaluator
from src.schemas.evaluation_schemas import UserProfileInput
from src.services.evaluation_service import EvaluationService
from src.utils.exceptions import BadRequestError, ExternalServiceError

LABELS = ["Tech", "Design", "Management", "Entrepreneurship", "Research"]


class TestEvaluationService:
    """Test suite for EvaluationService."""

    @pytest.fixture
    def evaluator(self):
        """Mock interest evaluator."""
        evaluator = Mock(spec=InterestEvaluator)
        evaluator.evaluate_interests = AsyncMock()
        return evaluator

    @pytest.fixture
    def service(self, evaluator):
        return EvaluationService(evaluator)

    @pytest.fixture
    def profile(self):
        return UserProfileInput(name="Asha", current_degree="B.Tech", branch="CSE")

    @pytest.fixture
    def answers(self):
        return {
            "What do you enjoy building?": "I like building small web apps and automation scripts",
            "Describe a project you are proud of": "ok",
        }

    @pytest.mark.asyncio
    async def test_missing_profile(self, service, answers):
        with pytest.raises(BadRequestError, match="User profile is required"):
            await service.evaluate(None, answers)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answers", [None, {}])
    async def test_missing_answers(self, service, profile, answers, evaluator):
        with pytest.raises(BadRequestError, match="Answers are required"):
            await service.evaluate(profile, answers)

        evaluator.evaluate_interests.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_evaluator_receives_profile_and_invalid_answers(
        self, service, evaluator, profile, answers
    ):
        evaluator.evaluate_interests.return_value = '{"summary": "ok"}'

        await service.evaluate(profile, answers)

        profile_data, sent_answers, invalid = evaluator.evaluate_interests.await_args.args
        assert profile_data == {"name": "Asha", "current_degree": "B.Tech", "branch": "CSE"}
        assert sent_answers == answers
        assert invalid == {"Describe a project you are proud of": "ok"}

    @pytest.mark.asyncio
    async def test_invalid_model_output(self, service, evaluator, profile, answers):
        evaluator.evaluate_interests.return_value = "Sorry, I cannot help with that."

        with pytest.raises(BadRequestError, match="Invalid response received from AI service"):
            await service.evaluate(profile, answers)

    @pytest.mark.asyncio
    async def test_non_object_json(self, service, evaluator, profile, answers):
        evaluator.evaluate_interests.return_value = "[1, 2, 3]"

        with pytest.raises(BadRequestError, match="Failed to parse evaluation result"):
            await service.evaluate(profile, answers)

    @pytest.mark.asyncio
    async def test_evaluator_errors_propagate(self, service, evaluator, profile, answers):
        evaluator.evaluate_interests.side_effect = ExternalServiceError(
            "AI service unavailable", service="openai"
        )

        with pytest.raises(ExternalServiceError):
            await service.evaluate(profile, answers)

    @pytest.mark.asyncio
    async def test_fenced_output_is_normalized(self, service, evaluator, profile, answers):
        payload = {
            "interests": {"tech": 60, "design": 30, "management": 30, "entrepreneurship": 0, "research": 0},
            "pie_chart_labels": LABELS,
            "pie_chart_values": [1, 2, 3, 4, 5],
            "strengths": ["Curious", "Consistent"],
            "summary": "Leans towards building software.",
        }
        evaluator.evaluate_interests.return_value = f"```json\n{json.dumps(payload)}\n```"

        result = await service.evaluate(profile, answers)

        assert result.interests == {
            "tech": 50.0,
            "design": 25.0,
            "management": 25.0,
            "entrepreneurship": 0.0,
            "research": 0.0,
        }
        assert result.pie_chart_values == [50.0, 25.0, 25.0, 0.0, 0.0]
        assert result.strengths == ["Curious", "Consistent"]
        assert result.summary == "Leans towards building software."
        assert result.invalid_answers == {"Describe a project you are proud of": "ok"}

    @pytest.mark.asyncio
    async def test_missing_categories_fill_pie_with_zero(self, service, evaluator, profile, answers):
        payload = {
            "interests": {"tech": 1, "design": 1, "management": 1},
            "pie_chart_labels": LABELS,
        }
        evaluator.evaluate_interests.return_value = json.dumps(payload)

        result = await service.evaluate(profile, answers)

        assert result.interests == {"tech": 33.33, "design": 33.33, "management": 33.33}
        assert result.pie_chart_values == [33.33, 33.33, 33.33, 0.0, 0.0]

    @pytest.mark.asyncio
    async def test_pie_values_kept_without_five_labels(self, service, evaluator, profile, answers):
        payload = {
            "interests": {"tech": 3, "design": 1},
            "pie_chart_labels": ["Tech", "Design"],
            "pie_chart_values": [70, 30],
        }
        evaluator.evaluate_interests.return_value = json.dumps(payload)

        result = await service.evaluate(profile, answers)

        assert result.interests == {"tech": 75.0, "design": 25.0}
        assert result.pie_chart_values == [70.0, 30.0]

    @pytest.mark.asyncio
    async def test_zero_interests_share_equally(self, service, evaluator, profile, answers):
        payload = {"interests": {"tech": 0, "design": 0, "management": 0, "entrepreneurship": 0}}
        evaluator.evaluate_interests.return_value = json.dumps(payload)

        result = await service.evaluate(profile, answers)

        assert set(result.interests.values()) == {25.0}


class TestParseEvaluation:
    """Test suite for EvaluationService.parse_evaluation."""

    def test_non_numeric_scores_become_zero(self):
        result = EvaluationService.parse_evaluation('{"interests": {"tech": "high", "design": 4}}')

        assert result.interests == {"tech": 0.0, "design": 4.0}

    @pytest.mark.parametrize("raw", ['"NaN"', '"Infinity"', '"1e400"', "1" + "0" * 400])
    def test_non_finite_scores_become_zero(self, raw):
        result = EvaluationService.parse_evaluation('{"interests": {"tech": ' + raw + ', "design": 4}}')

        assert result.interests == {"tech": 0.0, "design": 4.0}

    def test_unknown_categories_are_ignored(self):
        result = EvaluationService.parse_evaluation('{"interests": {"tech": 4, "cooking": 9}}')

        assert result.interests == {"tech": 4.0}

    def test_structured_text_fields_are_serialized(self):
        result = EvaluationService.parse_evaluation(
            '{"roadmap_90_days": {"month_1": "Learn Python"}, "recommended_roles": ["SDE"]}'
        )

        assert json.loads(result.roadmap_90_days) == {"month_1": "Learn Python"}
        assert result.recommended_roles == ["SDE"]

    def test_absent_fields_stay_empty(self):
        result = EvaluationService.parse_evaluation("{}")

        assert result.interests is None
        assert result.pie_chart_values is None
        assert result.invalid_answers == {}
