# src/semquiz/exceptions.py
"""Exceptions raised by semquiz.

Only session-integrity and content errors reach callers. Embedding failures
are raised by the embedder and absorbed by the evaluator.
"""

from typing import Any


class SemQuizError(Exception):
    """Base exception for semquiz."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EmbeddingUnavailableError(SemQuizError):
    """The embedding provider failed, timed out or returned a malformed body."""

    def __init__(self, message: str, model: str, cause: BaseException | None = None) -> None:
        super().__init__(message, {"model": model})
        self.model = model
        self.cause = cause


class InvalidSessionStateError(SemQuizError):
    """Operation requested on a missing, expired, finished or out-of-range session.

    Callers should discard the session and ask the user to restart the quiz.
    """


class InsufficientContentError(SemQuizError):
    """Fewer questions exist for a topic than were requested at start."""

    def __init__(self, topic: str, available: int, requested: int) -> None:
        super().__init__(
            f"insufficient questions for topic '{topic}': "
            f"{available} available, {requested} requested",
            {"topic": topic, "available": available, "requested": requested},
        )
        self.topic = topic
        self.available = available
        self.requested = requested


class ConfigurationError(SemQuizError):
    """Invalid configuration file or values."""
