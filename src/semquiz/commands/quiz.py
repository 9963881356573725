# src/semquiz/commands/quiz.py
"""Quiz commands - start, answer, next, retry, finish and status.

Each function handles one user request: it opens the configured stores,
applies one Quiz operation and returns a result dataclass. Session and
content errors are reported through ``success=False``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from semquiz.commands.base import (
    AnswerResult,
    FinishResult,
    QuestionResult,
    QuestionView,
    SessionInfo,
    StartResult,
    StatusResult,
    TopicInfo,
    open_semquiz,
)
from semquiz.exceptions import EmbeddingUnavailableError, SemQuizError
from semquiz.logging import get_logger
from semquiz.models import TOPICS, topic_name

if TYPE_CHECKING:
    from semquiz.models import Question, QuizSession
    from semquiz.semquiz import SemQuiz

logger = get_logger(__name__)

DEFAULT_SESSION_KEY = "default"
HEALTH_CHECK_TEXT = "ping"


def _view(question: Question, session: QuizSession) -> QuestionView:
    return QuestionView(
        id=question.id,
        topic=question.topic,
        text=question.text,
        number=session.index + 1,
        total=session.total,
    )


def start(
    topic: str,
    count: int | None = None,
    model: str | None = None,
    metric: str | None = None,
    key: str = DEFAULT_SESSION_KEY,
    data_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    sq: SemQuiz | None = None,
) -> StartResult:
    """Start a new quiz on a topic, replacing any previous session for key.

    Args:
        topic: Topic to draw questions from
        count: Number of questions (default: settings.default_question_count)
        model: Embedding model (unknown names fall back to the default)
        metric: Similarity metric (unknown names fall back to cosine)
        key: Session key identifying the user
        data_dir: Override data directory
        config_path: Override config file path
        sq: Existing SemQuiz instance (skips configuration loading)

    Returns:
        StartResult with the first question
    """
    if sq is None:
        opened = open_semquiz(data_dir, config_path)
        if isinstance(opened, str):
            return StartResult(success=False, error=opened, topic=topic)
        sq = opened

    if topic not in TOPICS:
        return StartResult(
            success=False,
            error=f"Unknown topic '{topic}'. Available topics: {', '.join(TOPICS)}",
            topic=topic,
        )

    quiz = sq.quiz()
    try:
        session = quiz.start(
            key,
            topic,
            count if count is not None else sq.settings.default_question_count,
            model=model,
            metric=metric,
        )
        question = quiz.current(key)
    except (SemQuizError, ValueError) as e:
        return StartResult(success=False, error=str(e), topic=topic)

    return StartResult(
        success=True,
        topic=topic,
        model=session.model,
        metric=session.metric.value,
        question=_view(question, session) if question else None,
    )


def answer(
    text: str,
    key: str = DEFAULT_SESSION_KEY,
    data_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    sq: SemQuiz | None = None,
) -> AnswerResult:
    """Grade an answer to the current question.

    Args:
        text: The user's answer
        key: Session key identifying the user
        data_dir: Override data directory
        config_path: Override config file path
        sq: Existing SemQuiz instance (skips configuration loading)

    Returns:
        AnswerResult with the grading outcome and the updated score
    """
    if sq is None:
        opened = open_semquiz(data_dir, config_path)
        if isinstance(opened, str):
            return AnswerResult(success=False, error=opened)
        sq = opened

    quiz = sq.quiz()
    try:
        result = quiz.submit(key, text)
        session = quiz.session(key)
    except SemQuizError as e:
        return AnswerResult(success=False, error=e.message)

    return AnswerResult(
        success=True,
        is_correct=result.is_correct,
        similarity=result.score,
        distance=result.distance,
        canonical_answer=result.canonical_answer,
        used_fallback=result.used_fallback,
        score=session.score,
        total=session.total,
    )


def next_question(
    key: str = DEFAULT_SESSION_KEY,
    data_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    sq: SemQuiz | None = None,
) -> QuestionResult:
    """Move to the next question once the current one has been answered."""
    if sq is None:
        opened = open_semquiz(data_dir, config_path)
        if isinstance(opened, str):
            return QuestionResult(success=False, error=opened)
        sq = opened

    quiz = sq.quiz()
    try:
        question = quiz.advance(key)
        session = quiz.session(key)
    except SemQuizError as e:
        return QuestionResult(success=False, error=e.message)

    return QuestionResult(
        success=True,
        question=_view(question, session) if question else None,
        complete=session.is_complete,
        score=session.score,
        total=session.total,
    )


def retry(
    key: str = DEFAULT_SESSION_KEY,
    data_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    sq: SemQuiz | None = None,
) -> QuestionResult:
    """Show the current question again without changing progress."""
    if sq is None:
        opened = open_semquiz(data_dir, config_path)
        if isinstance(opened, str):
            return QuestionResult(success=False, error=opened)
        sq = opened

    quiz = sq.quiz()
    try:
        question = quiz.retry(key)
        session = quiz.session(key)
    except SemQuizError as e:
        return QuestionResult(success=False, error=e.message)

    return QuestionResult(
        success=True,
        question=_view(question, session),
        score=session.score,
        total=session.total,
    )


def finish(
    key: str = DEFAULT_SESSION_KEY,
    data_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    sq: SemQuiz | None = None,
) -> FinishResult:
    """Clear the session for key and report the final score."""
    if sq is None:
        opened = open_semquiz(data_dir, config_path)
        if isinstance(opened, str):
            return FinishResult(success=False, error=opened)
        sq = opened

    session = sq.quiz().finish(key)
    if session is None:
        return FinishResult(success=True, had_session=False)

    return FinishResult(
        success=True,
        had_session=True,
        score=session.score,
        total=session.total,
        topic=session.topic,
    )


def check_provider(sq: SemQuiz, model: str | None = None) -> str | None:
    """Embed one word with the provider. Returns None if healthy, else the reason."""
    model = model or sq.settings.default_model
    try:
        vector = sq.embedder.embed_text(HEALTH_CHECK_TEXT, model)
    except EmbeddingUnavailableError as e:
        return e.message
    if not vector:
        return f"Provider returned an empty embedding for {model}"
    return None


def status(
    key: str = DEFAULT_SESSION_KEY,
    check: bool = False,
    data_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    sq: SemQuiz | None = None,
) -> StatusResult:
    """Report question counts, the session for key and optionally provider health.

    Reading the score is allowed after the quiz is complete.

    Args:
        key: Session key identifying the user
        check: If True, embed one word to check the provider
        data_dir: Override data directory
        config_path: Override config file path
        sq: Existing SemQuiz instance (skips configuration loading)
    """
    if sq is None:
        opened = open_semquiz(data_dir, config_path)
        if isinstance(opened, str):
            return StatusResult(success=False, error=opened)
        sq = opened

    repository = sq.question_repository
    result = StatusResult(success=True, total_questions=repository.count_questions())
    for topic in repository.list_topics():
        result.topics.append(
            TopicInfo(
                topic=topic,
                name=topic_name(topic),
                question_count=repository.count_questions(topic),
            )
        )

    session = sq.session_store.load(key)
    if session is not None:
        result.session = SessionInfo(
            topic=session.topic,
            state=session.state.value,
            number=session.index + 1,
            total=session.total,
            score=session.score,
            model=session.model,
            metric=session.metric.value,
        )

    if check:
        result.provider_checked = True
        result.provider_error = check_provider(sq)
        result.provider_ok = result.provider_error is None
        if not result.provider_ok:
            logger.warning("provider_unhealthy", reason=result.provider_error)

    return result
