"""Core types for the claude-lint validation engine.

Defines the layer enumeration, the immutable file and diagnostic records
passed between the scanner, validator and reporter, and the error types
raised by the engine.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from claude_lint.config import LintConfig


class Layer(enum.Enum):
    """Content category a file belongs to, decided by its path alone."""

    ROOT = "root"
    AGENT = "agent"
    SKILL = "skill"
    REFERENCE = "reference"


def split_lines(content: str) -> list[str]:
    """Split text on line feeds only.

    A trailing line feed does not add an empty line, and a carriage return
    before a line feed is dropped. Form feeds and Unicode line separators
    stay inside their line.
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def count_lines(content: str) -> int:
    return content.count("\n") + (1 if content and not content.endswith("\n") else 0)


class LintError(Exception):
    """Base class for errors raised by the validation engine."""


class RootNotFoundError(LintError):
    """Raised when the configuration root is missing or not a directory."""

    def __init__(self, root: Path, reason: str) -> None:
        self.root = root
        self.reason = reason
        super().__init__(f"{root} {reason}")


@dataclass(frozen=True)
class CandidateFile:
    """A classified file and its content, read once.

    Attributes:
        path: Path of the file as displayed to the user (root joined with
            the relative path, e.g. ".claude/agents/reviewer.md").
        relative_path: Path relative to the configuration root.
        layer: Layer the file was classified into.
        content: Raw decoded text.
        line_count: Number of newline-delimited lines in ``content``.
    """

    path: Path
    relative_path: Path
    layer: Layer
    content: str
    line_count: int

    @classmethod
    def from_content(
        cls, path: Path, relative_path: Path, layer: Layer, content: str
    ) -> CandidateFile:
        """Build a candidate, deriving the line count from the content."""
        return cls(
            path=path,
            relative_path=relative_path,
            layer=layer,
            content=content,
            line_count=count_lines(content),
        )


CheckFunc = Callable[["CandidateFile", "LintConfig"], list[str]]


@dataclass(frozen=True)
class Check:
    """A named, layer-scoped rule.

    Attributes:
        name: Stable identifier of the check (e.g. "fenced_code").
        func: Pure function returning zero or more violation messages.
    """

    name: str
    func: CheckFunc

    def __call__(self, candidate: CandidateFile, config: LintConfig) -> list[str]:
        return self.func(candidate, config)


@dataclass(frozen=True)
class Diagnostic:
    """A single reported violation.

    Attributes:
        path: Display path of the offending file.
        message: Human-readable description of the violation.
        check: Name of the check that produced it.
        layer: Layer of the offending file, if it was classified.
    """

    path: Path
    message: str
    check: str = ""
    layer: Layer | None = None


@dataclass
class ValidationResult:
    """Ordered diagnostics for a whole run.

    Attributes:
        root: Configuration root as given by the user.
        diagnostics: Diagnostics in file discovery order, then check order.
        files_checked: Number of candidate files processed.
    """

    root: Path
    diagnostics: list[Diagnostic] = field(default_factory=list)
    files_checked: int = 0

    @property
    def clean(self) -> bool:
        """True when no diagnostics were produced."""
        return not self.diagnostics

    @property
    def error_count(self) -> int:
        return len(self.diagnostics)
