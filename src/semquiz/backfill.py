# src/semquiz/backfill.py
"""Reference embedding backfill.

Questions are created without embeddings or with embeddings for only some
models. Backfill computes the missing reference vectors from each canonical
answer and stores those whose length matches the model's dimension.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from semquiz.embedder import Embedder
from semquiz.exceptions import EmbeddingUnavailableError
from semquiz.logging import get_logger
from semquiz.models import EMBEDDING_DIMENSIONS, Question
from semquiz.stores import QuestionRepository

logger = get_logger(__name__)

# Called with (questions_done, questions_total)
BackfillProgressCallback = Callable[[int, int], None]


@dataclass
class BackfillReport:
    """Outcome of a backfill run.

    Attributes:
        embedded: Vectors computed and stored
        skipped: (question, model) pairs that already had a vector
        failed: Pairs where the provider failed or returned a wrong-sized vector
        errors: (question_id, model, reason) for each failure
    """

    embedded: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[tuple[int, str, str]] = field(default_factory=list)


class ReferenceBackfill:
    """Fills in missing reference embeddings for stored questions."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        embedder: Embedder,
        dimensions: dict[str, int] | None = None,
    ) -> None:
        self.question_repository = question_repository
        self.embedder = embedder
        self.dimensions = dimensions if dimensions is not None else dict(EMBEDDING_DIMENSIONS)

    def run(
        self,
        models: list[str] | None = None,
        topic: str | None = None,
        on_progress: BackfillProgressCallback | None = None,
    ) -> BackfillReport:
        """Embed canonical answers for every question missing a vector.

        Args:
            models: Models to backfill (default: all models with known dimensions).
            topic: Restrict to one topic.
            on_progress: Optional progress callback.
        """
        models = list(models) if models is not None else list(self.dimensions)
        unknown = [m for m in models if m not in self.dimensions]
        if unknown:
            raise ValueError(f"Unknown embedding models: {', '.join(unknown)}")

        if topic is not None:
            questions = self.question_repository.find_by_topic(topic)
        else:
            questions = self.question_repository.list_questions()

        report = BackfillReport()
        for done, question in enumerate(questions, start=1):
            for model in models:
                self._backfill_one(question, model, report)
            if on_progress:
                on_progress(done, len(questions))

        logger.info(
            "backfill_complete",
            questions=len(questions),
            embedded=report.embedded,
            skipped=report.skipped,
            failed=report.failed,
        )
        return report

    def _backfill_one(self, question: Question, model: str, report: BackfillReport) -> None:
        if question.reference_embedding(model) is not None:
            report.skipped += 1
            return

        try:
            vector = self.embedder.embed_answer(question, model)
        except EmbeddingUnavailableError as e:
            report.failed += 1
            report.errors.append((question.id, model, e.message))
            return

        expected = self.dimensions[model]
        if len(vector) != expected:
            logger.warning(
                "backfill_dimension_mismatch",
                question_id=question.id,
                model=model,
                got=len(vector),
                expected=expected,
            )
            report.failed += 1
            report.errors.append(
                (question.id, model, f"expected {expected} dimensions, got {len(vector)}")
            )
            return

        self.question_repository.set_embedding(question.id, model, vector)
        report.embedded += 1
