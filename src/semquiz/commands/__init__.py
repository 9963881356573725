# src/semquiz/commands/__init__.py
"""UI-agnostic command layer for semquiz.

Command functions return data structures, allowing UIs to render results
appropriately.

Usage:
    from semquiz.commands import quiz

    result = quiz.start("geography", count=3, key="alice")
    result = quiz.answer("Paris", key="alice")
    result = quiz.next_question(key="alice")
"""

from semquiz.commands import backfill, config_cmd, quiz
from semquiz.commands.base import (
    AnswerResult,
    BackfillResult,
    CommandResult,
    ConfigResult,
    FinishResult,
    ProgressCallback,
    ProgressUpdate,
    QuestionResult,
    QuestionView,
    SessionInfo,
    SettingInfo,
    StartResult,
    StatusResult,
    TopicInfo,
    open_semquiz,
)

__all__ = [
    # Base types
    "ProgressUpdate",
    "ProgressCallback",
    "CommandResult",
    "open_semquiz",
    # Result types
    "StartResult",
    "AnswerResult",
    "QuestionResult",
    "QuestionView",
    "FinishResult",
    "StatusResult",
    "TopicInfo",
    "SessionInfo",
    "BackfillResult",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "quiz",
    "backfill",
    "config_cmd",
]
