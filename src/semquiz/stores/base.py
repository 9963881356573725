# src/semquiz/stores/base.py
"""Abstract base classes for storage."""

from abc import ABC, abstractmethod

from semquiz.models import Question, QuizSession


class QuestionRepository(ABC):
    """Abstract base class for question storage.

    The quiz engine only reads questions; writes exist for content owners and
    for reference-embedding backfill.
    """

    @abstractmethod
    def get(self, question_id: int) -> Question | None:
        """Retrieve a question by ID. Returns None if not found."""
        ...

    @abstractmethod
    def find_by_topic(self, topic: str) -> list[Question]:
        """Return all questions for a topic (empty list if none)."""
        ...

    @abstractmethod
    def put(self, question: Question) -> None:
        """Store a question with its embeddings, overwriting if it exists."""
        ...

    @abstractmethod
    def put_many(self, questions: list[Question]) -> None:
        """Store multiple questions, overwriting if they exist."""
        ...

    @abstractmethod
    def set_embedding(self, question_id: int, model: str, embedding: list[float]) -> None:
        """Store the reference embedding of one question for one model.

        Raises:
            KeyError: If the question does not exist.
            ValueError: If the vector length does not match the model's declared
                dimension (pydantic ValidationError).
        """
        ...

    @abstractmethod
    def list_topics(self) -> list[str]:
        """List all topics that have at least one question."""
        ...

    @abstractmethod
    def count_questions(self, topic: str | None = None) -> int:
        """Count questions, optionally restricted to one topic."""
        ...

    def list_questions(self) -> list[Question]:
        """Return every question, grouped by topic."""
        questions: list[Question] = []
        for topic in self.list_topics():
            questions.extend(self.find_by_topic(topic))
        return questions


class SessionStore(ABC):
    """Abstract base class for per-user quiz session storage.

    Sessions are isolated by key; one key never observes another's state.
    """

    @abstractmethod
    def load(self, key: str) -> QuizSession | None:
        """Load the session for a key. Returns None if missing or expired."""
        ...

    @abstractmethod
    def save(self, key: str, session: QuizSession) -> None:
        """Persist the session for a key, replacing any previous one."""
        ...

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove the session for a key (no-op if absent)."""
        ...
