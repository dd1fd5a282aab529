"""
Local vector similarity helpers.

The store performs the primary search; these are used for re-ranking
candidates already in memory and for sanity checks in tooling.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple, TypeVar

from scout.errors import DimensionMismatchError

T = TypeVar("T")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity in [-1, 1]. A zero vector yields ``nan``.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    denominator = math.sqrt(norm_a) * math.sqrt(norm_b)
    if denominator == 0.0:
        return math.nan
    return dot / denominator


def rank_by_similarity(
    query: Sequence[float],
    candidates: Iterable[Tuple[T, Sequence[float]]],
    threshold: float | None = None,
) -> List[Tuple[T, float]]:
    """Score ``(item, embedding)`` pairs against ``query``, best first."""
    scored: List[Tuple[T, float]] = []
    for item, embedding in candidates:
        score = cosine_similarity(query, embedding)
        if math.isnan(score):
            continue
        if threshold is not None and score < threshold:
            continue
        scored.append((item, score))
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


__all__ = ["cosine_similarity", "rank_by_similarity"]
