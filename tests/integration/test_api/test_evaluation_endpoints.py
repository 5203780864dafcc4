"""Integration tests for the interest evaluation endpoint."""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from src.api.dependencies import get_interest_evaluator
from src.api.main import app
from src.llm.base_llm import InterestEvaluator
from src.utils.exceptions import ExternalServiceError

URL = "/api/v1/evaluations"

PROFILE = {"name": "Asha", "current_degree": "B.Tech", "branch": "CSE"}
ANSWERS = {
    "What do you enjoy building?": "I enjoy building web apps with my friends",
    "What would you do with a free year?": "idk",
}


class TestEvaluationEndpoint:
    """POST /evaluations."""

    @pytest.fixture
    def evaluator(self):
        evaluator = Mock(spec=InterestEvaluator)
        evaluator.evaluate_interests = AsyncMock()
        app.dependency_overrides[get_interest_evaluator] = lambda: evaluator
        return evaluator

    def test_evaluation(self, client, evaluator):
        evaluator.evaluate_interests.return_value = json.dumps({
            "interests": {"tech": 6, "design": 2, "management": 2},
            "pie_chart_labels": ["Tech", "Design", "Management", "Entrepreneurship", "Research"],
            "summary": "Builder at heart.",
        })

        response = client.post(URL, json={"profile": PROFILE, "answers": ANSWERS})

        assert response.status_code == 200
        body = response.json()
        assert body["interests"] == {"tech": 60.0, "design": 20.0, "management": 20.0}
        assert body["pie_chart_values"] == [60.0, 20.0, 20.0, 0.0, 0.0]
        assert body["summary"] == "Builder at heart."
        assert body["invalid_answers"] == {"What would you do with a free year?": "idk"}

    def test_missing_profile(self, client, evaluator, assert_error_body):
        response = client.post(URL, json={"answers": ANSWERS})

        assert_error_body(response, 400, "User profile is required")
        evaluator.evaluate_interests.assert_not_awaited()

    def test_missing_answers(self, client, evaluator, assert_error_body):
        response = client.post(URL, json={"profile": PROFILE})

        assert_error_body(response, 400, "Answers are required")

    def test_unusable_model_output(self, client, evaluator, assert_error_body):
        evaluator.evaluate_interests.return_value = "I am not sure."

        response = client.post(URL, json={"profile": PROFILE, "answers": ANSWERS})

        assert_error_body(response, 400, "Invalid response received from AI service")

    def test_upstream_failure(self, client, evaluator, assert_error_body):
        evaluator.evaluate_interests.side_effect = ExternalServiceError(
            "AI service unavailable", service="openai"
        )

        response = client.post(URL, json={"profile": PROFILE, "answers": ANSWERS})

        assert_error_body(response, 502, "AI service unavailable")
