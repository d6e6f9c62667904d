"""Pytest configuration and fixtures for claude-lint tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

ENV_VARS = (
    "CLAUDE_LINT_ROOT",
    "CLAUDE_LINT_AGENT_MAX_LINES",
    "CLAUDE_LINT_SKILL_MAX_LINES",
    "CLAUDE_LINT_REFERENCE_HEADER_LINES",
    "CLAUDE_LINT_STRICT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CLAUDE_LINT_* variables from the host out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a helper that writes files under tmp_path/.claude.

    The helper takes a mapping of relative path to content and returns the
    root directory.
    """

    def _write(files: dict[str, str]) -> Path:
        root = tmp_path / ".claude"
        root.mkdir(exist_ok=True)
        for rel_path, content in files.items():
            target = root / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def in_tmp_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
