"""Storage abstractions for semquiz."""

from semquiz.stores.base import QuestionRepository, SessionStore
from semquiz.stores.memory import InMemoryQuestionRepository, InMemorySessionStore
from semquiz.stores.sqlite_question import SQLiteQuestionRepository
from semquiz.stores.sqlite_session import SQLiteSessionStore

__all__ = [
    "QuestionRepository",
    "SessionStore",
    "InMemoryQuestionRepository",
    "InMemorySessionStore",
    "SQLiteQuestionRepository",
    "SQLiteSessionStore",
]
