"""LLM integration module.

Provides the interest evaluator interface and its OpenAI implementation.
"""

from .base_llm import InterestEvaluator
from .openai_llm import OpenAIInterestEvaluator
from .prompts import build_evaluation_prompt

__all__ = [
    "InterestEvaluator",
    "OpenAIInterestEvaluator",
    "build_evaluation_prompt",
]
