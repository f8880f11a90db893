"""Score normalizers used by the fusion strategies."""

from __future__ import annotations

import math
from typing import List, Sequence


def rank_score(rank: int, rank_constant: int = 60) -> float:
    """
    Score a hit by its position alone.

    RRF score = 1 / (k + rank + 1) for a zero-based rank

    Args:
        rank: Zero-based position in the result set
        rank_constant: The constant k; larger values flatten the curve

    Returns:
        Score in (0, 1], strictly decreasing in rank
    """
    return 1.0 / (rank_constant + rank + 1)


def rank_scores(count: int, rank_constant: int = 60) -> List[float]:
    """Rank scores for ``count`` hits in rank order."""
    return [rank_score(rank, rank_constant) for rank in range(count)]


def min_max_normalize(scores: Sequence[float], equal_score_value: float = 1.0) -> List[float]:
    """
    Scale scores linearly onto [0, 1].

    norm(score) = (score - min) / (max - min)

    The highest score maps to exactly 1 and the lowest to exactly 0. When
    all scores are equal (including a single score) every score maps to
    ``equal_score_value``.

    Args:
        scores: Raw scores from one result set
        equal_score_value: Value used when max == min

    Returns:
        Normalized scores in input order
    """
    if not scores:
        return []

    low = min(scores)
    high = max(scores)
    if high == low:
        return [equal_score_value] * len(scores)

    span = high - low
    if math.isinf(span):
        # Halving both ends keeps the span finite for extreme magnitudes
        half_low = low / 2
        span = high / 2 - half_low
        return [(score / 2 - half_low) / span for score in scores]

    return [(score - low) / span for score in scores]
