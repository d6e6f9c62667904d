"""CLI utility functions for claude-lint.

Provides helper functions for:
- Config wiring: Extracting Typer CLI options and passing to load_config
- Output: Consistent stdout/stderr lines with exit codes
- Logging: Rich log handler for --verbose runs
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from claude_lint.config import LintConfig, load_config

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_FAILURE = 1  # Diagnostics found, bad input, or internal error

LOGGER_NAME = "claude_lint"


# -----------------------------------------------------------------------------
# Output Helpers
# -----------------------------------------------------------------------------


def error_line(msg: str) -> None:
    """Print ``error: <msg>`` to stderr.

    The prefix is styled, but click strips styles when stderr is not a
    terminal, so piped output is plain text.
    """
    styled_prefix = typer.style("error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)


def error(msg: str, *, exit_code: int = EXIT_FAILURE) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Args:
        msg: The error message to display.
        exit_code: Exit code to use (default: EXIT_FAILURE=1).

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    error_line(msg)
    raise typer.Exit(code=exit_code)


def success(msg: str) -> None:
    """Print a success message to stdout."""
    typer.echo(msg)


def plain(msg: str, *, err: bool = False) -> None:
    typer.echo(msg, err=err)


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route claude_lint log records to stderr through Rich.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        console: Console to render to. Defaults to a stderr console.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    logger.addHandler(handler)


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    root: str | None = None,
    strict: bool | None = None,
    start_dir: Path | None = None,
) -> LintConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Args:
        root: Override for the configuration root.
        strict: Override for strict mode.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved LintConfig instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {}

    if root is not None:
        cli_overrides["root"] = root
    if strict is not None:
        cli_overrides["strict"] = strict

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir)
    except ValueError as e:
        error(f"invalid configuration: {e}")
