"""Base interface for LLM-backed interest evaluation.

Providers return the raw completion text; extracting and validating the JSON
inside it is the caller's job.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class InterestEvaluator(ABC):
    """Abstract base class for interest evaluation providers."""

    provider: str = "unknown"

    @abstractmethod
    async def evaluate_interests(
        self,
        profile_data: Mapping[str, str],
        answers: Mapping[str, Optional[str]],
        invalid_answers: Mapping[str, str],
    ) -> str:
        """Ask the model for an interest evaluation.

        Args:
            profile_data: Non-empty profile fields keyed by field name
            answers: Chat answers keyed by question
            invalid_answers: Answers flagged as vague or placeholder

        Returns:
            str: Raw model output, expected to contain a JSON object

        Raises:
            ExternalServiceError: If the provider call fails
        """

    async def health_check(self) -> bool:
        """Check whether the provider is usable."""
        return True

    async def close(self) -> None:
        """Release provider resources."""
