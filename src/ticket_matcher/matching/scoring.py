"""
Hybrid confidence scoring for tag-filtered candidates.

Combines:
- Tag rank (default 70%) - position in the tag-filtered pool
- Text similarity (default 30%) - TF-IDF cosine similarity to the current text

Confidence is reported as an integer percentage in [0, 100].
"""

from typing import List, Sequence

import numpy as np

from ..models.matching import MatchResult

MAX_CONFIDENCE = 100


def base_confidence(position: int, step: int = 5) -> int:
    """
    Tag-rank confidence for the candidate at 0-based position in the pool.

    Examples:
        >>> [base_confidence(i) for i in range(5)]
        [100, 95, 90, 85, 80]
    """
    return max(MAX_CONFIDENCE - step * position, 0)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(72.5) == 72), which would
    make confidences depend on the parity of the integer part.

    Examples:
        >>> round_half_up(72.5)
        73
        >>> round_half_up(72.49)
        72
    """
    return int(np.floor(value + 0.5))


def blend_confidence(
    base: float, text_similarity: float, tag_weight: float = 0.7, tfidf_weight: float = 0.3
) -> int:
    """
    Hybrid confidence from tag-rank base and text similarity.

    final = round(base * tag_weight + similarity * 100 * tfidf_weight),
    clipped to [0, 100].

    Args:
        base: Tag-rank confidence (0-100)
        text_similarity: Cosine similarity (0.0-1.0)
        tag_weight: Weight of the tag-rank component
        tfidf_weight: Weight of the text component

    Returns:
        Integer confidence in [0, 100]

    Examples:
        >>> blend_confidence(100, 1.0)
        100
        >>> blend_confidence(100, 0.0)
        70
        >>> blend_confidence(95, 0.5)
        82
    """
    blended = base * tag_weight + text_similarity * MAX_CONFIDENCE * tfidf_weight
    return int(np.clip(round_half_up(blended), 0, MAX_CONFIDENCE))


def rank_by_confidence(matches: Sequence[MatchResult]) -> List[MatchResult]:
    """
    Re-sort matches by confidence descending.

    The sort is stable, so equal confidences keep their tag-rank order.
    """
    return sorted(matches, key=lambda match: match.confidence, reverse=True)
