"""claude-lint CLI Tool - Main entry point."""

from __future__ import annotations

import json
import logging

import typer
from rich.console import Console

from claude_lint import __version__
from claude_lint.cli_utils import (
    EXIT_SUCCESS,
    configure_logging,
    error,
    plain,
    success,
    wire_config,
)
from claude_lint.reporter import build_json_report, build_report, exit_code_for
from claude_lint.validators import RootNotFoundError, ValidationResult, validate_tree

app = typer.Typer(
    name="claude-lint",
    help="Validate the layering of a .claude/ context directory.",
    add_completion=False,
)

# Rich console for JSON output
console = Console()

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"claude-lint version {__version__}")
        raise typer.Exit()


@app.command()
def lint(
    path: str | None = typer.Argument(
        None,
        help="Configuration root to validate. Defaults to .claude.",
        show_default=False,
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Also require frontmatter and Capability/References sections.",
        show_default=False,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress the success line.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log scanned files and check results to stderr.",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Validate a claude configuration directory.

    Checks every layer of the tree:
    - CLAUDE.md: no workflow verbs, procedural sections or fenced code
    - agents/*.md: same, plus a 120-line ceiling
    - skills/*/SKILL.md: no fenced code or success criteria, 500-line ceiling
    - references/*.md: must declare themselves optional

    Exits with code 1 if any diagnostic is reported.
    """
    configure_logging(verbose)
    config = wire_config(root=path, strict=strict)
    root = config.get_root_path()
    logger.debug("validating %s (strict=%s)", root, config.strict)

    try:
        result = validate_tree(root, config)
    except RootNotFoundError as e:
        if json_output:
            console.print_json(json.dumps({"root": str(root), "clean": False, "error": str(e)}))
        error(str(e))
    except Exception as e:
        logger.debug("validation aborted", exc_info=True)
        error(f"internal error: {e!s}")

    if json_output:
        console.print_json(json.dumps(build_json_report(result)))
        _exit_for(result)
        return

    report = build_report(result)
    if not quiet:
        for line in report.stdout:
            success(line)
    for line in report.stderr:
        plain(line, err=True)

    _exit_for(result)


def _exit_for(result: ValidationResult) -> None:
    code = exit_code_for(result)
    if code != EXIT_SUCCESS:
        raise typer.Exit(code=code)
