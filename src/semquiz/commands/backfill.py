# src/semquiz/commands/backfill.py
"""Backfill command - compute missing reference embeddings.

This module provides the backfill logic used by the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from semquiz.commands.base import BackfillResult, ProgressCallback, ProgressUpdate, open_semquiz
from semquiz.models import EMBEDDING_DIMENSIONS

if TYPE_CHECKING:
    from semquiz.semquiz import SemQuiz


def backfill(
    models: list[str] | None = None,
    topic: str | None = None,
    data_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    on_progress: ProgressCallback | None = None,
    sq: SemQuiz | None = None,
) -> BackfillResult:
    """Embed canonical answers for questions missing reference vectors.

    Args:
        models: Models to backfill (default: every known model)
        topic: Restrict to one topic
        data_dir: Override data directory
        config_path: Override config file path
        on_progress: Optional callback, called once per question
        sq: Existing SemQuiz instance (skips configuration loading)

    Returns:
        BackfillResult with counts and per-vector failures
    """
    if sq is None:
        opened = open_semquiz(data_dir, config_path)
        if isinstance(opened, str):
            return BackfillResult(success=False, error=opened)
        sq = opened

    selected = list(models) if models else list(EMBEDDING_DIMENSIONS)

    def _progress(done: int, total: int) -> None:
        if on_progress:
            on_progress(ProgressUpdate(current=done, total=total))

    try:
        report = sq.backfill().run(models=selected, topic=topic, on_progress=_progress)
    except ValueError as e:
        return BackfillResult(success=False, error=str(e), models=selected)

    return BackfillResult(
        success=True,
        models=selected,
        embedded=report.embedded,
        skipped=report.skipped,
        failed=report.failed,
        errors=report.errors,
    )
