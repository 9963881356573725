# src/semquiz/models/results.py
"""Result data models for answer evaluation."""

from pydantic import BaseModel

from semquiz.similarity import SimilarityMetric


class EvaluationResult(BaseModel):
    """Outcome of scoring one user answer against one question.

    ``score`` is the similarity shown to the user. For the L2 metric it is the
    ``1 - distance`` approximation and ``distance`` holds the raw value used
    for the correctness decision.
    """

    score: float
    is_correct: bool
    canonical_answer: str
    metric: SimilarityMetric
    model: str
    distance: float | None = None
    used_fallback: bool = False
