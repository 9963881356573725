# src/semquiz/stores/memory.py
"""In-memory stores for tests and embedding semquiz in a host application."""

from semquiz.models import Question, QuizSession
from semquiz.stores.base import QuestionRepository, SessionStore


class InMemoryQuestionRepository(QuestionRepository):
    """Dict-backed question repository."""

    def __init__(self, questions: list[Question] | None = None) -> None:
        self._questions: dict[int, Question] = {}
        self.put_many(questions or [])

    def get(self, question_id: int) -> Question | None:
        question = self._questions.get(question_id)
        return question.model_copy(deep=True) if question else None

    def find_by_topic(self, topic: str) -> list[Question]:
        return [
            q.model_copy(deep=True)
            for _, q in sorted(self._questions.items())
            if q.topic == topic
        ]

    def put(self, question: Question) -> None:
        self._questions[question.id] = question.model_copy(deep=True)

    def put_many(self, questions: list[Question]) -> None:
        for question in questions:
            self.put(question)

    def set_embedding(self, question_id: int, model: str, embedding: list[float]) -> None:
        question = self._questions.get(question_id)
        if question is None:
            raise KeyError(f"Question {question_id} not found")
        embeddings = {**question.embeddings, model: list(embedding)}
        # Re-validate so dimension checks apply to backfilled vectors
        self._questions[question_id] = Question.model_validate(
            {**question.model_dump(), "embeddings": embeddings}
        )

    def list_topics(self) -> list[str]:
        return sorted({q.topic for q in self._questions.values()})

    def count_questions(self, topic: str | None = None) -> int:
        if topic is None:
            return len(self._questions)
        return sum(1 for q in self._questions.values() if q.topic == topic)


class InMemorySessionStore(SessionStore):
    """Dict-backed session store.

    Sessions are stored as JSON so loaded objects never alias saved ones,
    matching the behavior of persistent stores.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, str] = {}

    def load(self, key: str) -> QuizSession | None:
        data = self._sessions.get(key)
        return QuizSession.model_validate_json(data) if data is not None else None

    def save(self, key: str, session: QuizSession) -> None:
        self._sessions[key] = session.model_dump_json()

    def clear(self, key: str) -> None:
        self._sessions.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._sessions
