"""Answer quality heuristics for free-text questionnaire answers.

Short, vague or placeholder answers are collected so that evaluation can
mention them in the generated report instead of silently scoring them.
"""

from typing import Dict, Mapping, Optional

MIN_CHARACTER_COUNT = 15
MIN_WORD_COUNT = 3
MIN_LETTER_RATIO = 0.5


def is_likely_invalid(answer: Optional[str]) -> bool:
    """Check whether an answer looks too short or too noisy to be useful.

    Args:
        answer: Raw answer text

    Returns:
        bool: True if the answer is missing, blank, too short, has too few
        words or is mostly non-letter characters
    """
    if answer is None:
        return True

    trimmed = answer.strip()
    if not trimmed:
        return True
    if len(trimmed) < MIN_CHARACTER_COUNT:
        return True
    if len(trimmed.split()) < MIN_WORD_COUNT:
        return True

    letter_count = sum(1 for char in trimmed if char.isalpha())
    return letter_count / len(trimmed) < MIN_LETTER_RATIO


def collect_invalid_answers(
    answers: Optional[Mapping[Optional[str], Optional[str]]],
) -> Dict[str, str]:
    """Collect answers that look short, vague or placeholder-like.

    Questions that are missing or blank are skipped. Input order is kept.

    Args:
        answers: Mapping of question text to answer text

    Returns:
        Dict[str, str]: Question to stripped answer for every invalid answer
    """
    invalid: Dict[str, str] = {}
    if answers is None:
        return invalid

    for question, answer in answers.items():
        if question is None or not question.strip():
            continue
        if is_likely_invalid(answer):
            invalid[question] = "" if answer is None else answer.strip()

    return invalid


__all__ = [
    "MIN_CHARACTER_COUNT",
    "MIN_WORD_COUNT",
    "MIN_LETTER_RATIO",
    "is_likely_invalid",
    "collect_invalid_answers",
]
