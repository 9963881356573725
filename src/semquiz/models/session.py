# src/semquiz/models/session.py
"""Quiz session state machine.

A QuizSession is plain data plus pure transitions. It is loaded from a
SessionStore at the start of a request, transitioned, and saved back at the
end; nothing keeps it in memory between requests.

States::

    not_started --start()--> in_progress(index) --advance() at last index--> complete
                                  |  ^                                          ^
                                  |  +-- record_attempt() / retry()             |
                                  +------------------complete()-----------------+
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from semquiz.exceptions import InsufficientContentError, InvalidSessionStateError
from semquiz.models.question import DEFAULT_EMBEDDING_MODEL
from semquiz.similarity import SimilarityMetric


class QuizState(str, Enum):
    """Lifecycle state of a quiz session."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


def choose_questions(
    question_ids: Sequence[int],
    count: int,
    rng: random.Random | None = None,
) -> list[int]:
    """Choose ``count`` distinct ids uniformly at random without replacement.

    Shuffles a copy of the pool and takes the first ``count`` ids.
    """
    pool = list(question_ids)
    (rng or random.Random()).shuffle(pool)
    return pool[:count]


class QuizSession(BaseModel):
    """Per-user, per-attempt quiz state."""

    topic: str = ""
    question_ids: list[int] = Field(default_factory=list)
    index: int = 0
    score: int = 0
    credited: set[int] = Field(default_factory=set)
    attempts: dict[int, int] = Field(default_factory=dict)
    model: str = DEFAULT_EMBEDDING_MODEL
    metric: SimilarityMetric = SimilarityMetric.COSINE
    state: QuizState = QuizState.NOT_STARTED

    @model_validator(mode="after")
    def _check_invariants(self) -> QuizSession:
        total = len(self.question_ids)
        if self.index < 0 or self.index > total:
            raise ValueError(f"index {self.index} outside [0, {total}]")
        if not 0 <= self.score <= total:
            raise ValueError(f"score {self.score} outside [0, {total}]")
        if any(i < 0 or i >= total for i in self.credited):
            raise ValueError("credited index outside question range")
        if self.credited and max(self.credited) > self.index:
            raise ValueError("credited index ahead of current index")
        if self.score > len(self.credited):
            raise ValueError("score exceeds number of credited questions")
        return self

    @classmethod
    def start(
        cls,
        topic: str,
        pool: Sequence[int],
        count: int,
        *,
        model: str = DEFAULT_EMBEDDING_MODEL,
        metric: SimilarityMetric | str = SimilarityMetric.COSINE,
        rng: random.Random | None = None,
    ) -> QuizSession:
        """Create an in-progress session with ``count`` questions drawn from ``pool``.

        Raises:
            ValueError: If count is not positive.
            InsufficientContentError: If the pool holds fewer than ``count`` ids.
        """
        if count < 1:
            raise ValueError(f"Question count must be positive, got {count}")
        if len(pool) < count:
            raise InsufficientContentError(topic, available=len(pool), requested=count)

        return cls(
            topic=topic,
            question_ids=choose_questions(pool, count, rng),
            model=model,
            metric=SimilarityMetric.parse(metric),
            state=QuizState.IN_PROGRESS,
        )

    @property
    def total(self) -> int:
        return len(self.question_ids)

    @property
    def is_complete(self) -> bool:
        return self.state is QuizState.COMPLETE

    @property
    def has_answered_current(self) -> bool:
        """True once at least one answer was submitted at the current index."""
        return self.attempts.get(self.index, 0) > 0

    def current(self) -> int | None:
        """Question id at the current index, or None once the quiz is complete."""
        if self.is_complete:
            return None
        self._require_in_progress("read the current question")
        return self.question_ids[self.index]

    def record_attempt(self, is_correct: bool) -> bool:
        """Record a submission at the current index.

        Credits the index at most once, so resubmitting a correct answer after
        a reload or retry never scores twice.

        Returns:
            True if this submission awarded a point.
        """
        self._require_in_progress("submit an answer")
        self.attempts[self.index] = self.attempts.get(self.index, 0) + 1

        if is_correct and self.index not in self.credited:
            self.credited.add(self.index)
            self.score += 1
            return True
        return False

    def advance(self) -> int | None:
        """Move to the next question; completes the session after the last one.

        Returns:
            The next question id, or None if the session is now complete.
        """
        self._require_in_progress("advance")
        if not self.has_answered_current:
            raise InvalidSessionStateError(
                "Cannot advance before answering the current question",
                {"index": self.index},
            )

        self.index += 1
        if self.index >= self.total:
            self.state = QuizState.COMPLETE
            return None
        return self.question_ids[self.index]

    def retry(self) -> int:
        """Re-expose the current question without changing index, score or credits."""
        self._require_in_progress("retry")
        return self.question_ids[self.index]

    def complete(self) -> None:
        """Explicitly end the quiz. Reading the final score remains possible."""
        if self.state is QuizState.NOT_STARTED:
            raise InvalidSessionStateError("Cannot complete a quiz that was never started")
        self.state = QuizState.COMPLETE

    def _require_in_progress(self, action: str) -> None:
        if self.state is QuizState.COMPLETE:
            raise InvalidSessionStateError(
                f"Cannot {action}: the quiz is complete, please restart the quiz",
                {"state": self.state.value},
            )
        if self.state is not QuizState.IN_PROGRESS:
            raise InvalidSessionStateError(
                f"Cannot {action}: the quiz has not been started",
                {"state": self.state.value},
            )
        if not 0 <= self.index < self.total:
            raise InvalidSessionStateError(
                f"Cannot {action}: question index {self.index} is out of range",
                {"index": self.index, "total": self.total},
            )
