"""Score normalization utilities for psychometric results.

Raw category scores produced by evaluation are rescaled into a distribution
that sums to 100 so they can be rendered as percentages and pie charts.
"""

import math
from typing import Dict, Mapping, Optional

NORMALIZED_TOTAL = 100.0
SUM_TOLERANCE = 0.01


def normalize_scores(scores: Optional[Mapping[str, float]]) -> Dict[str, float]:
    """Normalize category scores so they sum to 100.

    Missing or empty input yields an empty mapping. When the raw scores sum
    to exactly zero every category receives an equal share. Otherwise each
    category gets ``raw / total * 100`` and any floating-point residual
    larger than ``SUM_TOLERANCE`` is added to the largest category.

    Args:
        scores: Mapping of category label to raw score

    Returns:
        Dict[str, float]: New mapping with the same keys, summing to 100

    Raises:
        ValueError: If the raw scores do not sum to a finite number
    """
    if not scores:
        return {}

    total = sum(scores.values())
    if not math.isfinite(total):
        raise ValueError("Scores must sum to a finite number")

    if total == 0:
        equal_share = NORMALIZED_TOTAL / len(scores)
        return {category: equal_share for category in scores}

    normalized = {
        category: (value / total) * NORMALIZED_TOTAL
        for category, value in scores.items()
    }

    current_sum = sum(normalized.values())
    if abs(current_sum - NORMALIZED_TOTAL) > SUM_TOLERANCE:
        # max() keeps the first key on ties
        largest = max(normalized, key=normalized.get)
        normalized[largest] += NORMALIZED_TOTAL - current_sum

    return normalized


def round_scores(
    scores: Optional[Mapping[str, float]],
    decimals: int = 2,
) -> Dict[str, float]:
    """Round every score half-up to the given number of decimal places.

    The sum-to-100 invariant is not re-applied; the result is meant for
    display only.

    Args:
        scores: Mapping of category label to score
        decimals: Number of decimal places to keep

    Returns:
        Dict[str, float]: New mapping with rounded values
    """
    if not scores:
        return {}

    multiplier = math.pow(10, decimals)
    return {
        category: math.floor(value * multiplier + 0.5) / multiplier
        for category, value in scores.items()
    }


def scores_total(scores: Optional[Mapping[str, float]]) -> float:
    """Sum the values of a score mapping, treating missing input as zero."""
    if not scores:
        return 0.0
    return float(sum(scores.values()))


__all__ = [
    "NORMALIZED_TOTAL",
    "SUM_TOLERANCE",
    "normalize_scores",
    "round_scores",
    "scores_total",
]
