"""semquiz - Semantic quiz answer evaluation.

Grades free-text quiz answers by comparing embeddings of the user's answer
and the canonical answer, and tracks per-user quiz progress.

Quick Start (LiteLLM + Local Storage):
    from semquiz import SemQuiz, LiteLLMProvider, LocalStorage

    sq = SemQuiz(
        provider=LiteLLMProvider(api_base="http://localhost:11434"),
        storage=LocalStorage("./semquiz_data"),
    )

    quiz = sq.quiz()
    quiz.start("alice", topic="geography", count=3)
    question = quiz.current("alice")
    result = quiz.submit("alice", "Paris")
    quiz.advance("alice")

Explicit Stores:
    from semquiz import SemQuiz, LiteLLMProvider
    from semquiz.stores import SQLiteQuestionRepository, SQLiteSessionStore

    sq = SemQuiz.from_stores(
        provider=LiteLLMProvider(),
        question_repository=SQLiteQuestionRepository("./data/questions.db"),
        session_store=SQLiteSessionStore("./data/sessions.db"),
    )
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("semquiz")
except PackageNotFoundError:
    # Running from a source tree without an installed distribution
    __version__ = "unknown"

from semquiz.backfill import BackfillReport, ReferenceBackfill

# Configuration objects
from semquiz.configuration import (
    LiteLLMProvider,
    LocalStorage,
    MemoryStorage,
    ProviderConfig,
    StorageConfig,
)
from semquiz.embedder import ClientEmbedder, Embedder
from semquiz.evaluator import AnswerEvaluator
from semquiz.exceptions import (
    ConfigurationError,
    EmbeddingUnavailableError,
    InsufficientContentError,
    InvalidSessionStateError,
    SemQuizError,
)
from semquiz.models import (
    EMBEDDING_DIMENSIONS,
    TOPICS,
    EvaluationResult,
    Question,
    QuizSession,
    QuizState,
)

# Provider ABCs
from semquiz.providers import EmbeddingClient
from semquiz.quiz import Quiz

# Central configuration
from semquiz.semquiz import SemQuiz
from semquiz.settings import Settings
from semquiz.similarity import SimilarityMetric

# Storage ABCs
from semquiz.stores import (
    InMemoryQuestionRepository,
    InMemorySessionStore,
    QuestionRepository,
    SessionStore,
    SQLiteQuestionRepository,
    SQLiteSessionStore,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "EMBEDDING_DIMENSIONS",
    "TOPICS",
    "EvaluationResult",
    "Question",
    "QuizSession",
    "QuizState",
    "SimilarityMetric",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    "MemoryStorage",
    # Storage
    "QuestionRepository",
    "SessionStore",
    "InMemoryQuestionRepository",
    "InMemorySessionStore",
    "SQLiteQuestionRepository",
    "SQLiteSessionStore",
    # Embedding
    "Embedder",
    "ClientEmbedder",
    "EmbeddingClient",
    # Evaluation and progression
    "AnswerEvaluator",
    "Quiz",
    "ReferenceBackfill",
    "BackfillReport",
    # Errors
    "SemQuizError",
    "EmbeddingUnavailableError",
    "InvalidSessionStateError",
    "InsufficientContentError",
    "ConfigurationError",
    # Central configuration
    "SemQuiz",
]
