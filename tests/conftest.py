"""Shared pytest fixtures."""

import random
import tempfile

import pytest

from semquiz.embedder import Embedder
from semquiz.evaluator import AnswerEvaluator
from semquiz.exceptions import EmbeddingUnavailableError
from semquiz.models import Question
from semquiz.quiz import Quiz
from semquiz.stores import InMemoryQuestionRepository, InMemorySessionStore

GEOGRAPHY = [
    ("What is the capital of France?", "Paris"),
    ("What is the capital of Japan?", "Tokyo"),
    ("What is the longest river in Africa?", "The Nile"),
    ("Which ocean lies between Africa and Australia?", "Indian Ocean"),
    ("What is the capital of Canada?", "Ottawa"),
    ("Which desert covers most of northern Africa?", "Sahara"),
    ("What is the highest mountain on Earth?", "Mount Everest"),
    ("What is the capital of Australia?", "Canberra"),
    ("Which country has the largest population in South America?", "Brazil"),
    ("What is the capital of Egypt?", "Cairo"),
    ("Which river flows through Baghdad?", "Tigris"),
    ("What is the smallest country in the world?", "Vatican City"),
    ("What is the capital of Kenya?", "Nairobi"),
    ("Which mountain range separates Europe and Asia?", "Ural Mountains"),
    ("What is the capital of Peru?", "Lima"),
]


class FakeEmbedder(Embedder):
    """Deterministic embedder for tests.

    Every distinct (trimmed, case-folded) text gets its own axis, so equal
    texts have cosine 1 and different texts cosine 0. Entries in ``vectors``
    override that.
    """

    def __init__(self, dim: int = 128) -> None:
        self.dim = dim
        self.vectors: dict[str, list[float]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail = False
        self._axes: dict[str, int] = {}

    def embed_text(self, text: str, model: str) -> list[float]:
        self.calls.append((text, model))
        if self.fail:
            raise EmbeddingUnavailableError("provider down", model=model)

        key = text.strip().casefold()
        if key in self.vectors:
            return list(self.vectors[key])

        if key not in self._axes:
            if len(self._axes) >= self.dim:
                raise RuntimeError("FakeEmbedder ran out of axes")
            self._axes[key] = len(self._axes)
        vector = [0.0] * self.dim
        vector[self._axes[key]] = 1.0
        return vector

    def embed_texts(self, texts: list[str], model: str) -> list[list[float]]:
        return [self.embed_text(t, model) for t in texts]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def geography_questions():
    return [
        Question(id=i, topic="geography", text=text, answer=answer)
        for i, (text, answer) in enumerate(GEOGRAPHY, start=1)
    ]


@pytest.fixture
def music_questions():
    return [
        Question(id=101, topic="music", text="Who composed the Four Seasons?", answer="Vivaldi"),
        Question(id=102, topic="music", text="How many keys does a piano have?", answer="88"),
    ]


@pytest.fixture
def question_repository(geography_questions, music_questions):
    return InMemoryQuestionRepository(geography_questions + music_questions)


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def quiz(question_repository, session_store, embedder):
    return Quiz(
        question_repository,
        session_store,
        AnswerEvaluator(embedder),
        rng=random.Random(42),
    )


@pytest.fixture
def embedder_factory():
    """The FakeEmbedder class, for tests that need more than one instance."""
    return FakeEmbedder
