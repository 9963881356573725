"""In-memory storage configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from semquiz.models import Question
    from semquiz.settings import Settings
    from semquiz.stores import QuestionRepository, SessionStore


@dataclass(frozen=True)
class MemoryStorage:
    """Non-persistent storage, seeded with an optional list of questions.

    Example:
        storage = MemoryStorage(questions=[Question(id=1, topic="music", ...)])
    """

    questions: list[Question] = field(default_factory=list)

    def build_stores(self, settings: Settings) -> tuple[QuestionRepository, SessionStore]:
        """Build fresh in-memory stores.

        Returns:
            Tuple of (question_repository, session_store)
        """
        from semquiz.stores import InMemoryQuestionRepository, InMemorySessionStore

        return InMemoryQuestionRepository(list(self.questions)), InMemorySessionStore()
