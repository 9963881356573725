"""CLI package for semquiz.

This package provides the command-line interface using Typer.
The CLI is a thin wrapper around the commands layer.
"""

from semquiz.cli.app import app, console

__all__ = ["app", "console"]
