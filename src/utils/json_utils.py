"""JSON helpers for model output handling."""

import json
from typing import Any, Optional

from src.utils.exceptions import ValidationError


def is_valid_json(text: Optional[str]) -> bool:
    """Check whether a string parses as JSON.

    Args:
        text: Candidate JSON text

    Returns:
        bool: True if the text is non-blank valid JSON
    """
    if text is None or not text.strip():
        return False
    try:
        json.loads(text)
    except (TypeError, ValueError):
        return False
    return True


def parse_json(text: str) -> Any:
    """Parse a JSON string.

    Args:
        text: JSON text

    Returns:
        Any: Parsed value

    Raises:
        ValidationError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Failed to parse JSON: {e}", cause=e) from e


def extract_json_from_text(text: Optional[str]) -> Optional[str]:
    """Extract a JSON object from text that may contain markdown fences.

    Args:
        text: Raw model output

    Returns:
        Optional[str]: The text between the first ``{`` and the last ``}``,
        the cleaned text when no object boundaries exist, or None for blank
        input
    """
    if text is None or not text.strip():
        return None

    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    cleaned = cleaned.strip()

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start >= 0 and end > start:
        return cleaned[start:end + 1]

    return cleaned


__all__ = ["is_valid_json", "parse_json", "extract_json_from_text"]
