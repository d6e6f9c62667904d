"""Tests for the claude-lint CLI."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from claude_lint.cli import app

runner = CliRunner()

WriteTree = Callable[[dict[str, str]], Path]

COMPLIANT_TREE = {
    "CLAUDE.md": "# Project\n\nWe prefer small, reviewable changes.\n",
    "agents/reviewer.md": "Cares about readability and naming.\n",
    "skills/summarise/SKILL.md": "## Capability\n\nSummarises diffs.\n",
    "references/pricing.md": "# Pricing\n\nThis playbook is optional.\n",
}


def test_version() -> None:
    """Test --version flag shows version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "claude-lint version" in result.stdout


def test_help() -> None:
    """Test --help flag shows help."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Validate a claude configuration" in result.stdout


class TestScenarios:
    """End-to-end scenarios run against a relative .claude root."""

    def test_workflow_verb_in_root(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test a numbered step in CLAUDE.md fails the run."""
        write_tree({"CLAUDE.md": "step 1: do X\n"})

        result = runner.invoke(app, [".claude"])

        assert result.exit_code == 1
        assert "error: .claude/CLAUDE.md: contains workflow verb 'step 1'" in result.stderr
        assert "1 error(s)" in result.stderr
        assert result.stdout == ""

    def test_fenced_code_in_skill_counts_with_root(
        self, in_tmp_path: Path, write_tree: WriteTree
    ) -> None:
        """Test diagnostics from several files are summed in the summary."""
        write_tree(
            {
                "CLAUDE.md": "step 1: do X\n",
                "skills/foo/SKILL.md": "Intro\n```\ncode\n```\n",
            }
        )

        result = runner.invoke(app, [".claude"])

        assert result.exit_code == 1
        assert result.stderr == (
            "error: .claude/CLAUDE.md: contains workflow verb 'step 1'\n"
            "error: .claude/skills/foo/SKILL.md: contains fenced code block\n"
            "\n"
            "2 error(s)\n"
        )

    def test_long_agent(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test a 130-line agent yields a single line-limit diagnostic."""
        write_tree({"agents/reviewer.md": "Values readable code.\n" * 130})

        result = runner.invoke(app, [".claude"])

        assert result.exit_code == 1
        assert result.stderr == (
            "error: .claude/agents/reviewer.md: too long (130 lines, max 120)\n\n1 error(s)\n"
        )

    def test_reference_without_optional(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test a reference lacking the marker yields one diagnostic."""
        write_tree({"references/pricing.md": "# Pricing\n\nTiers and discounts.\n"})

        result = runner.invoke(app, [".claude"])

        assert result.exit_code == 1
        lines = [line for line in result.stderr.splitlines() if line.startswith("error:")]
        assert lines == [
            "error: .claude/references/pricing.md: missing optional declaration "
            "('optional' not found in the first 15 lines)"
        ]

    def test_compliant_tree(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test a compliant tree prints the success line and exits 0."""
        write_tree(COMPLIANT_TREE)

        result = runner.invoke(app, [".claude"])

        assert result.exit_code == 0
        assert result.stdout == "ok: .claude passes all checks\n"
        assert result.stderr == ""


class TestLintCommand:
    """Tests for options and error paths of the lint command."""

    def test_default_root(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test the root defaults to .claude in the working directory."""
        write_tree(COMPLIANT_TREE)
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "ok: .claude passes all checks" in result.stdout

    def test_absolute_root(self, write_tree: WriteTree) -> None:
        """Test an absolute root is echoed back in paths."""
        root = write_tree({"CLAUDE.md": "```\nx\n```\n"})
        result = runner.invoke(app, [str(root)])
        assert result.exit_code == 1
        assert f"error: {root / 'CLAUDE.md'}: contains fenced code block" in result.stderr

    def test_missing_root(self, in_tmp_path: Path) -> None:
        """Test a missing root is a single fatal line with exit code 1."""
        result = runner.invoke(app, ["nowhere"])
        assert result.exit_code == 1
        assert result.stderr == "error: nowhere does not exist\n"
        assert result.stdout == ""

    def test_root_is_a_file(self, in_tmp_path: Path) -> None:
        """Test a file root is reported as not a directory."""
        (in_tmp_path / "CLAUDE.md").write_text("hello\n")
        result = runner.invoke(app, ["CLAUDE.md"])
        assert result.exit_code == 1
        assert result.stderr == "error: CLAUDE.md is not a directory\n"

    def test_runs_are_byte_identical(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test two runs over the same tree produce identical output."""
        write_tree(
            {
                "CLAUDE.md": "First, read everything.\n```\nx\n```\n",
                "agents/a.md": "Then, review.\n",
                "agents/b.md": "x\n" * 200,
                "references/r.md": "nothing here\n",
            }
        )

        first = runner.invoke(app, [".claude"])
        second = runner.invoke(app, [".claude"])

        assert first.exit_code == second.exit_code == 1
        assert first.stdout == second.stdout
        assert first.stderr == second.stderr

    def test_quiet_suppresses_success_line(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test --quiet keeps stdout empty on success."""
        write_tree(COMPLIANT_TREE)
        result = runner.invoke(app, [".claude", "--quiet"])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_strict_flag(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test --strict enables the frontmatter checks."""
        write_tree(COMPLIANT_TREE)
        result = runner.invoke(app, [".claude", "--strict"])
        assert result.exit_code == 1
        assert "error: .claude/agents/reviewer.md: missing YAML frontmatter" in result.stderr

    def test_strict_from_rc_file(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test strict mode can be switched on from .claudelintrc and off again."""
        write_tree(COMPLIANT_TREE)
        (in_tmp_path / ".claudelintrc").write_text("strict = true\n")

        assert runner.invoke(app, [".claude"]).exit_code == 1
        assert runner.invoke(app, [".claude", "--no-strict"]).exit_code == 0

    def test_root_from_environment(
        self, in_tmp_path: Path, write_tree: WriteTree, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test CLAUDE_LINT_ROOT sets the default root."""
        write_tree(COMPLIANT_TREE)
        os.rename(in_tmp_path / ".claude", in_tmp_path / "context")
        monkeypatch.setenv("CLAUDE_LINT_ROOT", "context")

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "ok: context passes all checks" in result.stdout

    def test_invalid_configuration(
        self, in_tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test bad configuration is reported with exit code 1."""
        monkeypatch.setenv("CLAUDE_LINT_AGENT_MAX_LINES", "many")
        result = runner.invoke(app, [".claude"])
        assert result.exit_code == 1
        assert "error: invalid configuration:" in result.stderr

    def test_json_output(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test --json emits a parsable report."""
        write_tree({"CLAUDE.md": "step 1: do X\n", "references/r.md": "Optional.\n"})

        result = runner.invoke(app, [".claude", "--json"])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["clean"] is False
        assert data["files_checked"] == 2
        assert data["error_count"] == 1
        assert data["diagnostics"] == [
            {
                "path": ".claude/CLAUDE.md",
                "layer": "root",
                "check": "workflow_verbs",
                "message": "contains workflow verb 'step 1'",
            }
        ]

    def test_json_output_clean(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test --json on a clean tree exits 0."""
        write_tree(COMPLIANT_TREE)
        result = runner.invoke(app, [".claude", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["clean"] is True

    def test_verbose_logs_to_stderr(self, in_tmp_path: Path, write_tree: WriteTree) -> None:
        """Test --verbose logs classification to stderr, not stdout."""
        write_tree(COMPLIANT_TREE)
        result = runner.invoke(app, [".claude", "--verbose"])
        assert result.exit_code == 0
        assert "classified" in result.stderr
        assert result.stdout == "ok: .claude passes all checks\n"

    def test_unexpected_error_is_reported(
        self, in_tmp_path: Path, write_tree: WriteTree, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test an unexpected engine error exits 1 with an error line."""
        write_tree(COMPLIANT_TREE)

        def explode(*args: object, **kwargs: object) -> None:
            raise RuntimeError("disk on fire")

        monkeypatch.setattr("claude_lint.cli.validate_tree", explode)

        result = runner.invoke(app, [".claude"])

        assert result.exit_code == 1
        assert result.stderr == "error: internal error: disk on fire\n"
