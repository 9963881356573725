# src/semquiz/cli/app.py
"""Command-line interface for semquiz.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Calls commands module functions
3. Renders results with Rich
"""

from __future__ import annotations

import math
from typing import NoReturn

try:
    import typer
    from rich.console import Console
    from rich.markup import escape
    from rich.panel import Panel
    from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
    from rich.table import Table
except ImportError as e:
    raise SystemExit(
        "CLI requires additional dependencies.\nInstall with: pip install semquiz[cli]"
    ) from e

from semquiz import __version__
from semquiz.commands import ProgressUpdate, backfill, config_cmd, quiz
from semquiz.commands.base import QuestionResult, QuestionView
from semquiz.commands.quiz import DEFAULT_SESSION_KEY
from semquiz.config import load_env_file
from semquiz.logging import setup_logging
from semquiz.models import TOPICS

app = typer.Typer(
    name="semquiz",
    help="semquiz - Quizzes graded by the meaning of your answer, not its spelling.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"semquiz {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="SEMQUIZ_LOG_LEVEL",
        help="Log level for diagnostics on stderr.",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        envvar="SEMQUIZ_LOG_FORMAT",
        help="Log format: console or json.",
    ),
) -> None:
    """semquiz - Semantic quiz answer evaluation."""
    load_env_file()
    setup_logging(log_level, "json" if log_format.lower() == "json" else "console")


# Options shared by every command
SESSION_OPTION = typer.Option(
    DEFAULT_SESSION_KEY,
    "--session",
    "-s",
    envvar="SEMQUIZ_SESSION",
    help="Session key identifying the player",
)
DATA_DIR_OPTION = typer.Option(
    None,
    "--data-dir",
    "-d",
    help="Data directory (default: from settings)",
)
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config file",
)
PLAIN_OPTION = typer.Option(
    False,
    "--plain",
    help="Plain output (no colors/formatting)",
)


def _fail(error: str | None, plain: bool) -> NoReturn:
    if plain:
        console.print(f"Error: {error}")
    else:
        console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


def _render_question(question: QuestionView, plain: bool) -> None:
    heading = f"Question {question.number}/{question.total}"
    if plain:
        console.print(f"{heading}: {question.text}")
    else:
        console.print(Panel(escape(question.text), title=heading, border_style="cyan"))


def _render_progress(result: QuestionResult, plain: bool) -> None:
    if result.question is not None:
        _render_question(result.question, plain)
        return
    message = f"Quiz complete. Final score: {result.score}/{result.total}"
    console.print(message if plain else f"[bold green]{message}[/bold green]")


@app.command(name="start")
def start_cmd(
    topic: str = typer.Argument(..., help=f"Quiz topic ({', '.join(TOPICS)})"),
    count: int = typer.Option(
        None,
        "--count",
        "-n",
        help="Number of questions (default: from settings)",
    ),
    model: str = typer.Option(
        None,
        "--model",
        "-m",
        help="Embedding model used for grading",
    ),
    metric: str = typer.Option(
        None,
        "--metric",
        help="Similarity metric: cosine, l2 or inner_product",
    ),
    session: str = SESSION_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Start a new quiz, replacing any quiz in progress."""
    result = quiz.start(
        topic,
        count=count,
        model=model,
        metric=metric,
        key=session,
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        _fail(result.error, plain)

    if plain:
        console.print(f"Started {result.topic} quiz ({result.model}, {result.metric})")
    else:
        console.print(
            f"[green]Started {result.topic} quiz[/green] "
            f"[dim]({result.model}, {result.metric})[/dim]"
        )
    if result.question is not None:
        _render_question(result.question, plain)


@app.command(name="answer")
def answer_cmd(
    text: str = typer.Argument(..., help="Your answer"),
    session: str = SESSION_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Answer the current question."""
    result = quiz.answer(text, key=session, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result.error, plain)

    verdict = "Correct!" if result.is_correct else "Not quite."
    if result.used_fallback:
        detail = "exact match"
    elif result.distance is not None and math.isinf(result.distance):
        # Incomparable vectors: the L2 sentinel distance is infinite
        detail = "no similarity"
    else:
        detail = f"similarity {result.similarity:.2f}"
        if result.distance is not None:
            detail += f", distance {result.distance:.2f}"

    if plain:
        console.print(f"{verdict} ({detail})")
        console.print(f"Expected: {result.canonical_answer}")
        console.print(f"Score: {result.score}/{result.total}")
    else:
        color = "green" if result.is_correct else "yellow"
        console.print(f"[{color}]{verdict}[/{color}] [dim]({detail})[/dim]")
        console.print(f"Expected: [bold]{escape(result.canonical_answer)}[/bold]")
        console.print(f"[dim]Score: {result.score}/{result.total}[/dim]")


@app.command(name="next")
def next_cmd(
    session: str = SESSION_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Move on to the next question."""
    result = quiz.next_question(key=session, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result.error, plain)
    _render_progress(result, plain)


@app.command(name="retry")
def retry_cmd(
    session: str = SESSION_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Show the current question again."""
    result = quiz.retry(key=session, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result.error, plain)
    _render_progress(result, plain)


@app.command(name="finish")
def finish_cmd(
    session: str = SESSION_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """End the quiz and show the final score."""
    result = quiz.finish(key=session, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result.error, plain)

    if not result.had_session:
        console.print("No quiz to finish." if plain else "[dim]No quiz to finish.[/dim]")
        return

    message = f"Final score for {result.topic}: {result.score}/{result.total}"
    console.print(message if plain else f"[bold green]{message}[/bold green]")


@app.command(name="status")
def status_cmd(
    check: bool = typer.Option(
        False,
        "--check",
        help="Embed one word to check the embedding provider",
    ),
    session: str = SESSION_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Show question bank statistics and quiz progress."""
    result = quiz.status(key=session, check=check, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result.error, plain)

    if plain:
        console.print(f"Questions: {result.total_questions}")
        for topic in result.topics:
            console.print(f"  {topic.name}: {topic.question_count}")
    else:
        table = Table(title="Question Bank")
        table.add_column("Topic", style="cyan")
        table.add_column("Questions", style="green", justify="right")
        for topic in result.topics:
            table.add_row(topic.name, str(topic.question_count))
        table.add_row("[bold]Total[/bold]", f"[bold]{result.total_questions}[/bold]")
        console.print(table)

    if result.session is None:
        console.print("No quiz in progress." if plain else "[dim]No quiz in progress.[/dim]")
    else:
        info = result.session
        if info.state == "complete":
            progress = f"complete, score {info.score}/{info.total}"
        else:
            progress = f"question {info.number}/{info.total}, score {info.score}"
        line = f"Quiz ({session}): {info.topic}, {progress} ({info.model}, {info.metric})"
        console.print(line if plain else f"[cyan]{line}[/cyan]", markup=not plain)

    if result.provider_checked:
        if result.provider_ok:
            console.print("Provider: ok" if plain else "Provider: [green]ok[/green]")
        else:
            message = f"Provider: unavailable ({result.provider_error})"
            console.print(message if plain else f"[yellow]{message}[/yellow]", markup=not plain)


@app.command(name="backfill")
def backfill_cmd(
    model: list[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model to backfill (repeatable, default: all known models)",
    ),
    topic: str = typer.Option(
        None,
        "--topic",
        "-t",
        help="Only backfill questions of this topic",
    ),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Compute missing reference embeddings for stored questions."""
    show_progress = not plain and console.is_terminal

    if show_progress:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=console,
        ) as progress:
            task = progress.add_task("Embedding answers", total=None)

            def on_progress(update: ProgressUpdate) -> None:
                progress.update(task, completed=update.current, total=update.total)

            result = backfill.backfill(
                models=model or None,
                topic=topic,
                data_dir=data_dir,
                config_path=config_file,
                on_progress=on_progress,
            )
    else:
        result = backfill.backfill(
            models=model or None,
            topic=topic,
            data_dir=data_dir,
            config_path=config_file,
        )

    if not result.success:
        _fail(result.error, plain)

    summary = (
        f"Embedded {result.embedded}, skipped {result.skipped}, failed {result.failed} "
        f"({', '.join(result.models)})"
    )
    console.print(summary if plain else f"[green]{summary}[/green]")
    for question_id, failed_model, reason in result.errors:
        line = f"  question {question_id} ({failed_model}): {reason}"
        console.print(line if plain else f"[yellow]{line}[/yellow]", markup=not plain)

    if result.failed:
        raise typer.Exit(1)


@app.command(name="config")
def config_cmd_handler(
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Show current configuration settings."""
    result = config_cmd.config(config_path=config_file, data_dir=data_dir)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    table = Table(title="semquiz Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    table.add_row("api_base", result.api_base, "")
    table.add_row("model_prefix", result.model_prefix, "")
    table.add_row("data_dir", result.data_dir, "")

    # Separator
    table.add_row("", "", "")

    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)

    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    if result.config_path:
        console.print(f"\n[dim]Config file: {result.config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")

    console.print("\n[dim]Precedence: env var > yaml settings > default[/dim]")
