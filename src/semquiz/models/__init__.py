"""Data models for semquiz."""

from semquiz.models.question import (
    DEFAULT_EMBEDDING_MODEL,
    EMBEDDING_DIMENSIONS,
    TOPICS,
    Question,
    Topic,
    topic_name,
)
from semquiz.models.results import EvaluationResult
from semquiz.models.session import QuizSession, QuizState, choose_questions

__all__ = [
    "DEFAULT_EMBEDDING_MODEL",
    "EMBEDDING_DIMENSIONS",
    "TOPICS",
    "Topic",
    "topic_name",
    "Question",
    "EvaluationResult",
    "QuizSession",
    "QuizState",
    "choose_questions",
]
