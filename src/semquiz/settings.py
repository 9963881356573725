# src/semquiz/settings.py
"""Behavioral settings for semquiz.

Settings are passed programmatically. The library itself does not read
environment variables; semquiz.config does that for the CLI and for
applications that want file/env based configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from semquiz.models.question import DEFAULT_EMBEDDING_MODEL
from semquiz.similarity import SimilarityMetric


class Settings(BaseModel):
    """Behavioral settings for semquiz.

    Correctness thresholds are deliberately not settings; they are named
    constants in semquiz.evaluator.

    Example:
        settings = Settings(default_metric="l2", embedding_timeout=5.0)
    """

    # Quiz defaults
    default_model: str = DEFAULT_EMBEDDING_MODEL
    default_metric: SimilarityMetric = SimilarityMetric.COSINE
    default_question_count: int = Field(default=5, ge=1)

    # Embedding provider
    embedding_timeout: float = Field(default=10.0, gt=0)
    num_retries: int = Field(default=1, ge=0)

    # Sessions idle for longer than this are discarded (None = never)
    session_ttl_seconds: float | None = 1800.0

    @field_validator("default_metric", mode="before")
    @classmethod
    def _parse_metric(cls, value: object) -> SimilarityMetric:
        if isinstance(value, SimilarityMetric):
            return value
        metric = SimilarityMetric.parse(str(value) if value is not None else None)
        if value and metric.value != str(value).strip().lower():
            raise ValueError(
                f"Unknown metric '{value}'. "
                f"Available metrics: {[m.value for m in SimilarityMetric]}"
            )
        return metric
