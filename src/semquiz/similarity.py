# src/semquiz/similarity.py
"""Vector similarity scoring between a candidate and a reference embedding.

Three metrics are supported:
- cosine: dot(a, b) / (||a|| * ||b||), range [-1, 1]
- l2: Euclidean distance sqrt(sum((a_i - b_i)^2)), range [0, inf)
- inner_product: dot(a, b) normalized by sqrt(||a||^2 * ||b||^2)

Mismatched or empty vectors never raise. They produce a sentinel: 0.0 for
the similarity metrics and infinity for L2 distance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

# Returned for degenerate input (length mismatch, empty vector, zero norm)
NO_SIMILARITY = 0.0
NO_DISTANCE = math.inf


class SimilarityMetric(str, Enum):
    """Similarity metric used to compare two embeddings."""

    COSINE = "cosine"
    L2 = "l2"
    INNER_PRODUCT = "inner_product"

    @classmethod
    def parse(cls, value: str | SimilarityMetric | None) -> SimilarityMetric:
        """Parse a metric name, falling back to cosine for unknown names."""
        if isinstance(value, SimilarityMetric):
            return value
        if not value:
            return cls.COSINE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.COSINE


@dataclass(frozen=True)
class ScoreBreakdown:
    """Score for one metric.

    Attributes:
        score: Similarity-like value used for display. For L2 this is
            ``1 - distance``, an approximation that can be negative and is
            not clamped.
        distance: Raw L2 distance (None for the similarity metrics).
    """

    score: float
    distance: float | None = None


def _as_arrays(a: Sequence[float], b: Sequence[float]) -> tuple[np.ndarray, np.ndarray] | None:
    """Convert both vectors to float arrays, or None when they are not comparable."""
    if len(a) == 0 or len(b) == 0 or len(a) != len(b):
        return None
    return np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity between two vectors.

    Zero vectors have no direction, so their similarity is 0 rather than an error.
    """
    arrays = _as_arrays(a, b)
    if arrays is None:
        return NO_SIMILARITY
    a_arr, b_arr = arrays

    norm_a, norm_b = np.linalg.norm(a_arr), np.linalg.norm(b_arr)
    if norm_a == 0 or norm_b == 0:
        return NO_SIMILARITY

    return float(np.dot(a_arr, b_arr) / (norm_a * norm_b))


def l2_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two vectors (infinity for incomparable vectors)."""
    arrays = _as_arrays(a, b)
    if arrays is None:
        return NO_DISTANCE
    a_arr, b_arr = arrays
    return float(np.linalg.norm(a_arr - b_arr))


def inner_product(a: Sequence[float], b: Sequence[float]) -> float:
    """Inner product normalized by its maximum possible magnitude.

    The denominator sqrt(||a||^2 * ||b||^2) bounds the result to [-1, 1].
    """
    arrays = _as_arrays(a, b)
    if arrays is None:
        return NO_SIMILARITY
    a_arr, b_arr = arrays

    max_possible = math.sqrt(float(np.dot(a_arr, a_arr)) * float(np.dot(b_arr, b_arr)))
    if max_possible == 0:
        return NO_SIMILARITY

    return float(np.dot(a_arr, b_arr)) / max_possible


def score(
    a: Sequence[float],
    b: Sequence[float],
    metric: SimilarityMetric | str = SimilarityMetric.COSINE,
) -> ScoreBreakdown:
    """Score two vectors under the selected metric."""
    metric = SimilarityMetric.parse(metric)

    if metric is SimilarityMetric.L2:
        distance = l2_distance(a, b)
        # Display-only approximation, not a true normalization
        return ScoreBreakdown(score=1.0 - distance, distance=distance)

    if metric is SimilarityMetric.INNER_PRODUCT:
        return ScoreBreakdown(score=inner_product(a, b))

    return ScoreBreakdown(score=cosine_similarity(a, b))
