"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from semquiz.settings import Settings
    from semquiz.stores import QuestionRepository, SessionStore


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite.

    All data is persisted to the specified directory:
    - questions.db: Questions and reference embeddings
    - sessions.db: Quiz sessions keyed by user/session key

    Args:
        data_dir: Base directory for all storage files.
                  Created if it doesn't exist.

    Example:
        storage = LocalStorage("./semquiz_data")
    """

    data_dir: str

    def build_stores(self, settings: Settings) -> tuple[QuestionRepository, SessionStore]:
        """Build the question repository and session store.

        Creates the data directory if it doesn't exist.

        Returns:
            Tuple of (question_repository, session_store)
        """
        from semquiz.stores import SQLiteQuestionRepository, SQLiteSessionStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        question_repository = SQLiteQuestionRepository(os.path.join(self.data_dir, "questions.db"))
        session_store = SQLiteSessionStore(
            os.path.join(self.data_dir, "sessions.db"),
            ttl_seconds=settings.session_ttl_seconds,
        )
        return question_repository, session_store
