# src/semquiz/semquiz.py
"""Central configuration class for semquiz."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from semquiz.backfill import ReferenceBackfill
    from semquiz.configuration import ProviderConfig, StorageConfig
    from semquiz.evaluator import AnswerEvaluator
    from semquiz.quiz import Quiz
    from semquiz.stores import QuestionRepository, SessionStore

from semquiz.models import EMBEDDING_DIMENSIONS
from semquiz.settings import Settings


class SemQuiz:
    """Central configuration for semquiz stores and components.

    SemQuiz bundles the stores and the embedder together so you can configure
    once and create a Quiz, an AnswerEvaluator or a ReferenceBackfill from it.

    There are two ways to create a SemQuiz instance:

    1. With a storage bundle:

        from semquiz import SemQuiz, LiteLLMProvider, LocalStorage

        sq = SemQuiz(
            provider=LiteLLMProvider(api_base="http://localhost:11434"),
            storage=LocalStorage("./semquiz_data"),
        )
        quiz = sq.quiz()

    2. With explicit stores:

        from semquiz import SemQuiz, LiteLLMProvider
        from semquiz.stores import SQLiteQuestionRepository, SQLiteSessionStore

        sq = SemQuiz.from_stores(
            provider=LiteLLMProvider(),
            question_repository=SQLiteQuestionRepository("./data/questions.db"),
            session_store=SQLiteSessionStore("./data/sessions.db"),
        )
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        question_repository: QuestionRepository | None = None,
        session_store: SessionStore | None = None,
        # Common
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Create a SemQuiz instance.

        Args:
            provider: Provider configuration (builds the embedder).
            storage: Storage bundle. Mutually exclusive with explicit stores.
            question_repository: Explicit question repository.
            session_store: Explicit session store.
            settings: Behavioral settings (default model and metric, timeouts, etc.)
            rng: Random source for question selection.

        Raises:
            ValueError: If neither storage bundle nor both explicit stores are provided,
                       or if both are provided.
        """
        self.settings = settings if settings is not None else Settings()

        if storage is not None:
            if question_repository is not None or session_store is not None:
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            self.question_repository, self.session_store = storage.build_stores(self.settings)

        elif question_repository is not None and session_store is not None:
            self.question_repository = cast("QuestionRepository", question_repository)
            self.session_store = cast("SessionStore", session_store)

        else:
            raise ValueError(
                "Must provide either 'storage' bundle or both explicit stores "
                "(question_repository, session_store)"
            )

        self.embedder = provider.build_embedder(self.settings)
        self._rng = rng

    @classmethod
    def from_stores(
        cls,
        *,
        provider: ProviderConfig,
        question_repository: QuestionRepository,
        session_store: SessionStore,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> SemQuiz:
        """Create a SemQuiz instance with explicit stores."""
        return cls(
            provider=provider,
            question_repository=question_repository,
            session_store=session_store,
            settings=settings,
            rng=rng,
        )

    def evaluator(self) -> AnswerEvaluator:
        """Create an AnswerEvaluator bounded by the configured embedding timeout."""
        from semquiz.evaluator import AnswerEvaluator

        return AnswerEvaluator(self.embedder, timeout=self.settings.embedding_timeout)

    def quiz(self) -> Quiz:
        """Create a Quiz using this instance's stores and settings."""
        from semquiz.quiz import Quiz

        return Quiz(
            question_repository=self.question_repository,
            session_store=self.session_store,
            evaluator=self.evaluator(),
            default_model=self.settings.default_model,
            default_metric=self.settings.default_metric,
            models=list(EMBEDDING_DIMENSIONS),
            rng=self._rng,
        )

    def backfill(self) -> ReferenceBackfill:
        """Create a ReferenceBackfill for the question repository."""
        from semquiz.backfill import ReferenceBackfill

        return ReferenceBackfill(self.question_repository, self.embedder)
