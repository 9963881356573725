# src/semquiz/commands/base.py
"""Base types for the commands layer.

This module defines the data structures returned by all commands. Commands
never raise for expected failures; they return a result with
``success=False`` and an ``error`` message instead.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from semquiz.semquiz import SemQuiz


@dataclass
class ProgressUpdate:
    """Progress update for long-running operations.

    Attributes:
        current: Current item number (1-indexed)
        total: Total number of items (0 for indeterminate)
        message: Optional status message
    """

    current: int
    total: int
    message: str | None = None

    @property
    def percentage(self) -> int:
        """Progress as percentage (0-100). Returns 0 if indeterminate."""
        if self.total == 0:
            return 0
        return int(100 * self.current / self.total)


# Callback type for progress updates
ProgressCallback = Callable[[ProgressUpdate], None]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class QuestionView:
    """A question as shown to the user; the canonical answer is withheld."""

    id: int
    topic: str
    text: str
    number: int  # 1-based position in the quiz
    total: int


@dataclass
class StartResult(CommandResult):
    """Result of the start command.

    Attributes:
        topic: Topic of the new quiz
        model: Embedding model used for grading
        metric: Similarity metric used for grading
        question: The first question
    """

    topic: str = ""
    model: str = ""
    metric: str = ""
    question: QuestionView | None = None


@dataclass
class AnswerResult(CommandResult):
    """Result of the answer command.

    Attributes:
        is_correct: Whether the answer was accepted
        similarity: Similarity shown to the user (1 - distance for L2)
        distance: Raw L2 distance, when the metric is l2
        canonical_answer: The expected answer
        used_fallback: True when exact matching decided the result
        score: Quiz score after this answer
        total: Number of questions in the quiz
    """

    is_correct: bool = False
    similarity: float = 0.0
    distance: float | None = None
    canonical_answer: str = ""
    used_fallback: bool = False
    score: int = 0
    total: int = 0


@dataclass
class QuestionResult(CommandResult):
    """Result of the next and retry commands.

    Attributes:
        question: The current question, None once the quiz is complete
        complete: True when the quiz has no more questions
        score: Current score
        total: Number of questions in the quiz
    """

    question: QuestionView | None = None
    complete: bool = False
    score: int = 0
    total: int = 0


@dataclass
class FinishResult(CommandResult):
    """Result of the finish command.

    Attributes:
        had_session: False when there was nothing to finish
        score: Final score
        total: Number of questions in the quiz
        topic: Topic of the finished quiz
    """

    had_session: bool = False
    score: int = 0
    total: int = 0
    topic: str = ""


@dataclass
class TopicInfo:
    """Question counts for a topic."""

    topic: str
    name: str
    question_count: int


@dataclass
class SessionInfo:
    """Progress of a stored quiz session."""

    topic: str
    state: str
    number: int  # 1-based, equals total + 1 once complete
    total: int
    score: int
    model: str
    metric: str


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        total_questions: Questions in the repository
        topics: Per-topic breakdown
        session: The stored session for the key, if any
        provider_checked: True if a provider health check was run
        provider_ok: Result of the health check
        provider_error: Failure reason when the health check failed
    """

    total_questions: int = 0
    topics: list[TopicInfo] = field(default_factory=list)
    session: SessionInfo | None = None
    provider_checked: bool = False
    provider_ok: bool = False
    provider_error: str | None = None


@dataclass
class BackfillResult(CommandResult):
    """Result of the backfill command.

    Attributes:
        models: Models that were backfilled
        embedded: Vectors computed and stored
        skipped: Vectors that already existed
        failed: Vectors that could not be computed
        errors: (question_id, model, reason) for each failure
    """

    models: list[str] = field(default_factory=list)
    embedded: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[tuple[int, str, str]] = field(default_factory=list)


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        api_base: Embedding service URL
        model_prefix: LiteLLM prefix added to bare model names
        data_dir: Data directory path
        settings: List of behavioral settings with sources
        config_path: Path to config file (if found)
        warnings: Unknown keys found in the config file
    """

    api_base: str = ""
    model_prefix: str = ""
    data_dir: str = ""
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None
    warnings: list[str] = field(default_factory=list)


def open_semquiz(
    data_dir: str | Path | None = None,
    config_path: str | Path | None = None,
) -> SemQuiz | str:
    """Create a SemQuiz from configuration, or return an error message."""
    from semquiz.config import ConfigError, get_semquiz

    try:
        sq = get_semquiz(str(data_dir) if data_dir is not None else None, config_path)
    except Exception as e:
        return f"Failed to open quiz storage: {e}"
    if isinstance(sq, ConfigError):
        return f"{sq.message} ({sq.suggestion})" if sq.suggestion else sq.message
    return sq
