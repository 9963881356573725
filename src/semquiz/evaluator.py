# src/semquiz/evaluator.py
"""Semantic answer evaluation.

The evaluator embeds the user's answer, compares it with the question's
reference embedding under the selected metric, and applies a fixed
metric-specific threshold. Whenever embeddings are unavailable it falls back
to case-insensitive exact comparison, so a result is always produced.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from semquiz.embedder import Embedder
from semquiz.exceptions import EmbeddingUnavailableError
from semquiz.logging import get_logger
from semquiz.models import EvaluationResult, Question
from semquiz.similarity import ScoreBreakdown, SimilarityMetric, score

logger = get_logger(__name__)

# Empirical cutoffs. Similarities must reach the threshold; L2 distance must not exceed it.
COSINE_THRESHOLD = 0.75
INNER_PRODUCT_THRESHOLD = 0.70
L2_DISTANCE_THRESHOLD = 0.50

THRESHOLDS: dict[SimilarityMetric, float] = {
    SimilarityMetric.COSINE: COSINE_THRESHOLD,
    SimilarityMetric.INNER_PRODUCT: INNER_PRODUCT_THRESHOLD,
    SimilarityMetric.L2: L2_DISTANCE_THRESHOLD,
}


def is_correct(metric: SimilarityMetric, breakdown: ScoreBreakdown) -> bool:
    """Apply the metric's threshold to a score."""
    threshold = THRESHOLDS[metric]
    if metric is SimilarityMetric.L2:
        distance = breakdown.distance if breakdown.distance is not None else 1.0 - breakdown.score
        return distance <= threshold
    return breakdown.score >= threshold


def exact_match(user_answer: str, canonical_answer: str) -> bool:
    """Case-insensitive comparison of trimmed answers."""
    return user_answer.strip().casefold() == canonical_answer.strip().casefold()


class AnswerEvaluator:
    """Scores a free-text answer against a question's canonical answer.

    Example:
        evaluator = AnswerEvaluator(embedder)
        result = evaluator.evaluate("Paris", question, "nomic-embed-text", "cosine")
        if result.is_correct:
            ...
    """

    def __init__(self, embedder: Embedder, timeout: float | None = 10.0) -> None:
        """Initialize the evaluator.

        Args:
            embedder: Embedder used for the user answer and missing references.
            timeout: Seconds allowed for the embedding calls in aevaluate().
                     The sync path relies on the embedding client's own timeout.
        """
        self.embedder = embedder
        self.timeout = timeout

    def evaluate(
        self,
        user_text: str | None,
        question: Question,
        model: str,
        metric: SimilarityMetric | str = SimilarityMetric.COSINE,
    ) -> EvaluationResult:
        """Evaluate an answer, embedding the user text and (if needed) the reference."""
        metric = SimilarityMetric.parse(metric)
        user_answer = (user_text or "").strip()

        if not user_answer:
            return self._fallback(user_answer, question, model, metric, reason="empty_answer")

        try:
            user_vector = self.embedder.embed_text(user_answer, model)
            if not user_vector:
                return self._fallback(
                    user_answer, question, model, metric, reason="empty_user_embedding"
                )

            reference = question.reference_embedding(model)
            if reference is None:
                logger.info("reference_embedding_missing", question_id=question.id, model=model)
                reference = self.embedder.embed_answer(question, model)

            return self._decide(user_answer, user_vector, reference, question, model, metric)
        except EmbeddingUnavailableError:
            return self._fallback(
                user_answer, question, model, metric, reason="provider_unavailable"
            )
        except Exception:
            logger.exception("evaluation_failed", question_id=question.id, model=model)
            return self._fallback(user_answer, question, model, metric, reason="unexpected_error")

    async def aevaluate(
        self,
        user_text: str | None,
        question: Question,
        model: str,
        metric: SimilarityMetric | str = SimilarityMetric.COSINE,
    ) -> EvaluationResult:
        """Evaluate an answer, issuing both embedding requests concurrently.

        Both calls share one timeout; on expiry the fallback decides.
        """
        metric = SimilarityMetric.parse(metric)
        user_answer = (user_text or "").strip()

        if not user_answer:
            return self._fallback(user_answer, question, model, metric, reason="empty_answer")

        try:
            reference = question.reference_embedding(model)
            if reference is None:
                logger.info("reference_embedding_missing", question_id=question.id, model=model)
                user_vector, reference = await asyncio.wait_for(
                    asyncio.gather(
                        self.embedder.aembed_text(user_answer, model),
                        self.embedder.aembed_answer(question, model),
                    ),
                    timeout=self.timeout,
                )
            else:
                user_vector = await asyncio.wait_for(
                    self.embedder.aembed_text(user_answer, model),
                    timeout=self.timeout,
                )

            if not user_vector:
                return self._fallback(
                    user_answer, question, model, metric, reason="empty_user_embedding"
                )

            return self._decide(user_answer, user_vector, reference, question, model, metric)
        except TimeoutError:
            return self._fallback(user_answer, question, model, metric, reason="timeout")
        except EmbeddingUnavailableError:
            return self._fallback(
                user_answer, question, model, metric, reason="provider_unavailable"
            )
        except Exception:
            logger.exception("evaluation_failed", question_id=question.id, model=model)
            return self._fallback(user_answer, question, model, metric, reason="unexpected_error")

    def _decide(
        self,
        user_answer: str,
        user_vector: Sequence[float],
        reference: Sequence[float],
        question: Question,
        model: str,
        metric: SimilarityMetric,
    ) -> EvaluationResult:
        if not reference:
            return self._fallback(
                user_answer, question, model, metric, reason="empty_reference_embedding"
            )

        if len(user_vector) != len(reference):
            logger.warning(
                "embedding_dimension_mismatch",
                question_id=question.id,
                model=model,
                user_dim=len(user_vector),
                reference_dim=len(reference),
            )

        breakdown = score(user_vector, reference, metric)
        correct = is_correct(metric, breakdown)
        logger.info(
            "answer_evaluated",
            question_id=question.id,
            model=model,
            metric=metric.value,
            score=breakdown.score,
            distance=breakdown.distance,
            is_correct=correct,
        )
        return EvaluationResult(
            score=breakdown.score,
            distance=breakdown.distance,
            is_correct=correct,
            canonical_answer=question.answer.strip(),
            metric=metric,
            model=model,
        )

    def _fallback(
        self,
        user_answer: str,
        question: Question,
        model: str,
        metric: SimilarityMetric,
        reason: str,
    ) -> EvaluationResult:
        correct = exact_match(user_answer, question.answer)
        logger.warning(
            "evaluation_fallback",
            question_id=question.id,
            model=model,
            reason=reason,
            is_correct=correct,
        )
        return EvaluationResult(
            score=1.0 if correct else 0.0,
            is_correct=correct,
            canonical_answer=question.answer.strip(),
            metric=metric,
            model=model,
            used_fallback=True,
        )
