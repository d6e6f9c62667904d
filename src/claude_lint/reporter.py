"""Diagnostic reporting for claude-lint.

Turns a ValidationResult into the lines written to stdout and stderr and
the process exit code. Formatting is pure so two runs over an unchanged
tree produce byte-identical output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from claude_lint.cli_utils import EXIT_FAILURE, EXIT_SUCCESS
from claude_lint.validators.base import Diagnostic, ValidationResult


@dataclass
class Report:
    """Rendered output of a run.

    Attributes:
        stdout: Lines for standard output.
        stderr: Lines for standard error.
        exit_code: Process exit code (0 clean, 1 otherwise).
    """

    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)
    exit_code: int = EXIT_SUCCESS


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Format one diagnostic as ``error: <path>: <message>``."""
    return f"error: {diagnostic.path}: {diagnostic.message}"


def format_summary(count: int) -> str:
    return f"{count} error(s)"


def format_success(root: Path) -> str:
    return f"ok: {root} passes all checks"


def exit_code_for(result: ValidationResult) -> int:
    return EXIT_SUCCESS if result.clean else EXIT_FAILURE


def build_report(result: ValidationResult) -> Report:
    """Render a validation result.

    Clean results produce a single success line on stdout. Otherwise every
    diagnostic is written to stderr in result order, followed by a blank
    line and the error count.

    Args:
        result: Result of a validation run.

    Returns:
        Report with output lines and exit code.
    """
    if result.clean:
        return Report(stdout=[format_success(result.root)], exit_code=EXIT_SUCCESS)

    stderr = [format_diagnostic(d) for d in result.diagnostics]
    stderr.append("")
    stderr.append(format_summary(result.error_count))
    return Report(stderr=stderr, exit_code=EXIT_FAILURE)


def build_json_report(result: ValidationResult) -> dict[str, Any]:
    """Render a validation result as a JSON-serialisable dictionary."""
    return {
        "root": str(result.root),
        "clean": result.clean,
        "files_checked": result.files_checked,
        "error_count": result.error_count,
        "diagnostics": [
            {
                "path": str(d.path),
                "layer": d.layer.value if d.layer else None,
                "check": d.check,
                "message": d.message,
            }
            for d in result.diagnostics
        ],
    }
