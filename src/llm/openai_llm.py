"""OpenAI integration for interest evaluation.

Calls the chat completions endpoint directly over httpx and returns the
message content of the first choice.
"""

import asyncio
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from src.llm.base_llm import InterestEvaluator
from src.llm.prompts import build_evaluation_prompt
from src.utils.exceptions import ExternalServiceError
from src.utils.logger import get_component_logger

logger = get_component_logger("llm")

MAX_TOKENS_EVALUATION = 4000

# Statuses worth retrying; everything else fails immediately
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class OpenAIInterestEvaluator(InterestEvaluator):
    """OpenAI chat-completions implementation of ``InterestEvaluator``."""

    provider = "openai"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        temperature: float = 0.7,
        timeout: float = 60.0,
        max_retries: int = 2,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize OpenAI evaluator.

        Args:
            api_key: OpenAI API key
            model: Model name
            base_url: Base URL for the OpenAI API
            temperature: Sampling temperature
            timeout: Request timeout in seconds
            max_retries: Retries for timeouts and retryable statuses
            client: Preconfigured HTTP client, mainly for tests
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.timeout = timeout
        self.max_retries = max_retries
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazily created HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    async def evaluate_interests(
        self,
        profile_data: Mapping[str, str],
        answers: Mapping[str, Optional[str]],
        invalid_answers: Mapping[str, str],
    ) -> str:
        """Request an interest evaluation from OpenAI.

        Raises:
            ExternalServiceError: If the key is missing, the request fails or
                the response has no content
        """
        if not self.api_key:
            raise ExternalServiceError(
                "OpenAI API key is not configured", service=self.provider
            )

        payload = {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": build_evaluation_prompt(profile_data, answers, invalid_answers),
                }
            ],
            "max_tokens": MAX_TOKENS_EVALUATION,
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }

        start_time = time.time()
        logger.info("Evaluating interests via OpenAI", extra={"model": self.model})

        response_data = await self._make_request_with_retries(payload)
        content = self._extract_content(response_data)

        logger.info(
            "OpenAI evaluation completed",
            extra={
                "model": self.model,
                "latency_ms": round((time.time() - start_time) * 1000, 2),
            }
        )
        return content

    async def _make_request_with_retries(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST to chat completions with exponential backoff.

        Args:
            payload: Request payload

        Returns:
            Dict[str, Any]: Decoded response body
        """
        last_exception: Optional[ExternalServiceError] = None

        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.post("/chat/completions", json=payload)
            except httpx.TimeoutException as e:
                last_exception = ExternalServiceError(
                    f"OpenAI request timed out after {self.timeout}s",
                    service=self.provider,
                    cause=e,
                )
            except httpx.RequestError as e:
                last_exception = ExternalServiceError(
                    f"OpenAI request failed: {str(e)}",
                    service=self.provider,
                    cause=e,
                )
            else:
                if response.status_code == 200:
                    return response.json()

                error = ExternalServiceError(
                    f"OpenAI request failed: {self._error_message(response)}",
                    service=self.provider,
                    upstream_status=response.status_code,
                )
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    raise error
                last_exception = error

            if attempt < self.max_retries:
                wait_time = (2 ** attempt) + (0.1 * attempt)
                logger.warning(
                    f"OpenAI request failed, retrying in {wait_time}s (attempt {attempt + 1})"
                )
                await asyncio.sleep(wait_time)

        raise last_exception

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            return response.json().get("error", {}).get("message", "Unknown error")
        except ValueError:
            return f"HTTP {response.status_code}"

    def _extract_content(self, response_data: Dict[str, Any]) -> str:
        choices = response_data.get("choices") or []
        if not choices:
            raise ExternalServiceError(
                "No choices returned from OpenAI API", service=self.provider
            )

        content = (choices[0].get("message") or {}).get("content")
        if content is None:
            raise ExternalServiceError(
                "Empty message returned from OpenAI API", service=self.provider
            )
        return content.strip()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = ["OpenAIInterestEvaluator", "MAX_TOKENS_EVALUATION"]
