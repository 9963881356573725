# src/semquiz/quiz.py
"""Quiz progression for one request at a time.

Every operation loads the session for a key from the SessionStore, applies
one QuizSession transition, and saves the result. The session is saved only
when the whole operation succeeds, so a failed request never leaves partial
state behind.
"""

from __future__ import annotations

import random
from collections.abc import Iterable

from semquiz.evaluator import AnswerEvaluator
from semquiz.exceptions import InvalidSessionStateError
from semquiz.logging import get_logger
from semquiz.models import (
    DEFAULT_EMBEDDING_MODEL,
    EMBEDDING_DIMENSIONS,
    EvaluationResult,
    Question,
    QuizSession,
    QuizState,
)
from semquiz.similarity import SimilarityMetric
from semquiz.stores import QuestionRepository, SessionStore

logger = get_logger(__name__)

RESTART_MESSAGE = "please restart the quiz"


class Quiz:
    """Runs quiz sessions against a question repository and a session store.

    Example:
        quiz = Quiz(repository, session_store, evaluator)
        quiz.start("alice", topic="geography", count=3)
        question = quiz.current("alice")
        result = quiz.submit("alice", "Paris")
        quiz.advance("alice")
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        session_store: SessionStore,
        evaluator: AnswerEvaluator,
        default_model: str = DEFAULT_EMBEDDING_MODEL,
        default_metric: SimilarityMetric | str = SimilarityMetric.COSINE,
        models: Iterable[str] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the quiz.

        Args:
            question_repository: Read access to questions.
            session_store: Keyed storage for per-user sessions.
            evaluator: Scores submitted answers.
            default_model: Embedding model used when none (or an unknown one) is selected.
            default_metric: Similarity metric used when none is selected.
            models: Selectable embedding models (default: all models with known dimensions).
            rng: Random source for question selection.
        """
        self.question_repository = question_repository
        self.session_store = session_store
        self.evaluator = evaluator
        self.models = tuple(models) if models is not None else tuple(EMBEDDING_DIMENSIONS)
        self.default_model = default_model
        self.default_metric = SimilarityMetric.parse(default_metric)
        self._rng = rng or random.Random()

    def resolve_model(self, model: str | None) -> str:
        """Return ``model`` if selectable, else the default model."""
        if not model:
            return self.default_model
        if model not in self.models:
            logger.warning("unknown_embedding_model", model=model, fallback=self.default_model)
            return self.default_model
        return model

    def start(
        self,
        key: str,
        topic: str,
        count: int,
        model: str | None = None,
        metric: SimilarityMetric | str | None = None,
    ) -> QuizSession:
        """Start a new quiz for ``key``, replacing any previous session.

        Raises:
            InsufficientContentError: If the topic has fewer than ``count`` questions.
                No session is created in that case.
        """
        pool = [q.id for q in self.question_repository.find_by_topic(topic)]
        session = QuizSession.start(
            topic,
            pool,
            count,
            model=self.resolve_model(model),
            metric=SimilarityMetric.parse(metric) if metric else self.default_metric,
            rng=self._rng,
        )
        self.session_store.save(key, session)
        logger.info(
            "quiz_started",
            key=key,
            topic=topic,
            count=count,
            model=session.model,
            metric=session.metric.value,
        )
        return session

    def session(self, key: str) -> QuizSession:
        """Return the stored session for ``key``; allowed after completion."""
        session = self.session_store.load(key)
        if session is None:
            raise InvalidSessionStateError(
                f"No active quiz, {RESTART_MESSAGE}",
                {"key": key},
            )
        return session.model_copy(deep=True)

    def current(self, key: str) -> Question | None:
        """Return the current question, or None once the quiz is complete."""
        session = self.session(key)
        question_id = session.current()
        if question_id is None:
            return None
        return self._question(key, question_id)

    def submit(self, key: str, user_text: str | None) -> EvaluationResult:
        """Evaluate an answer to the current question and credit it at most once."""
        session, question = self._load_current(key)
        result = self.evaluator.evaluate(user_text, question, session.model, session.metric)
        return self._record(key, session, result)

    async def asubmit(self, key: str, user_text: str | None) -> EvaluationResult:
        """Like submit(), but issues the embedding requests concurrently."""
        session, question = self._load_current(key)
        result = await self.evaluator.aevaluate(
            user_text, question, session.model, session.metric
        )
        return self._record(key, session, result)

    def advance(self, key: str) -> Question | None:
        """Move to the next question. Returns None when the quiz is now complete."""
        session = self._load_active(key)
        next_id = session.advance()
        question = self._question(key, next_id) if next_id is not None else None
        self.session_store.save(key, session)

        if session.is_complete:
            logger.info("quiz_completed", key=key, score=session.score, total=session.total)
        return question

    def retry(self, key: str) -> Question:
        """Return the current question again without changing progress."""
        session = self._load_active(key)
        question = self._question(key, session.retry())
        self.session_store.save(key, session)
        return question

    def complete(self, key: str) -> QuizSession:
        """End the quiz early; the final score stays readable until finish()."""
        session = self._load_active(key)
        session.complete()
        self.session_store.save(key, session)
        logger.info("quiz_completed", key=key, score=session.score, total=session.total)
        return session

    def finish(self, key: str) -> QuizSession | None:
        """Clear the stored session. Returns the final session, if there was one."""
        session = self.session_store.load(key)
        self.session_store.clear(key)
        if session is not None:
            logger.info("quiz_finished", key=key, score=session.score, total=session.total)
        return session

    def _load_active(self, key: str) -> QuizSession:
        session = self.session(key)
        if session.state is not QuizState.IN_PROGRESS:
            self.session_store.clear(key)
            raise InvalidSessionStateError(
                f"The quiz is {session.state.value.replace('_', ' ')}, {RESTART_MESSAGE}",
                {"key": key, "state": session.state.value},
            )
        return session

    def _load_current(self, key: str) -> tuple[QuizSession, Question]:
        session = self._load_active(key)
        question_id = session.current()
        assert question_id is not None  # in-progress sessions always have a current question
        return session, self._question(key, question_id)

    def _question(self, key: str, question_id: int) -> Question:
        question = self.question_repository.get(question_id)
        if question is None:
            self.session_store.clear(key)
            raise InvalidSessionStateError(
                f"Question {question_id} not found, {RESTART_MESSAGE}",
                {"key": key, "question_id": question_id},
            )
        return question

    def _record(self, key: str, session: QuizSession, result: EvaluationResult) -> EvaluationResult:
        credited = session.record_attempt(result.is_correct)
        self.session_store.save(key, session)
        logger.info(
            "answer_submitted",
            key=key,
            index=session.index,
            is_correct=result.is_correct,
            credited=credited,
            score=session.score,
        )
        return result
