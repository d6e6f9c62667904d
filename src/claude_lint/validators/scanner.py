"""Directory traversal for claude-lint.

Walks a configuration root in a fixed, alphabetical order and yields the
files that classify into a layer. Reading is kept separate from walking so
that a single unreadable file never stops the scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from claude_lint.validators.base import CandidateFile, Layer, RootNotFoundError
from claude_lint.validators.classifier import classify

logger = logging.getLogger(__name__)

# Directories never worth descending into
IGNORED_DIRS = frozenset(
    {
        ".venv",
        "venv",
        "node_modules",
        "__pycache__",
        ".git",
        ".tox",
        ".nox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "site-packages",
    }
)

# skills/<name>/references/<name>.md is the deepest candidate shape
MAX_DEPTH = 4


@dataclass(frozen=True)
class ScannedPath:
    """A discovered file that classified into a layer.

    Attributes:
        path: Display path (root joined with the relative path).
        relative_path: Path relative to the configuration root.
        layer: Layer assigned by the classifier.
    """

    path: Path
    relative_path: Path
    layer: Layer


class UnreadableFileError(Exception):
    """Raised when a candidate file cannot be opened or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"unreadable: {path} ({reason})")


def check_root(root: Path) -> None:
    """Ensure the configuration root exists and is a directory.

    Raises:
        RootNotFoundError: If the root is missing or not a directory.
    """
    if not root.exists():
        raise RootNotFoundError(root, "does not exist")
    if not root.is_dir():
        raise RootNotFoundError(root, "is not a directory")


def _walk(directory: Path, relative: Path, depth: int) -> list[Path]:
    """Return relative file paths below ``directory`` in sorted pre-order."""
    found: list[Path] = []

    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning("cannot list %s: %s", directory, e)
        return found

    for entry in entries:
        rel_entry = relative / entry.name
        if entry.is_dir():
            if entry.is_symlink() or entry.name in IGNORED_DIRS:
                logger.debug("skipping directory %s", rel_entry)
                continue
            if depth + 1 < MAX_DEPTH:
                found.extend(_walk(entry, rel_entry, depth + 1))
        elif entry.is_file() or (entry.is_symlink() and not entry.exists()):
            found.append(rel_entry)
        else:
            # FIFOs, sockets and device nodes would block or fail on read
            logger.debug("skipping special file %s", rel_entry)

    return found


def scan_candidates(root: Path) -> list[ScannedPath]:
    """Enumerate the classified files under a configuration root.

    Entries are visited depth first and sorted by name within each
    directory, so the result order is stable for an unchanged tree.

    Args:
        root: Configuration root as given by the user.

    Returns:
        Candidate paths in discovery order.

    Raises:
        RootNotFoundError: If the root is missing or not a directory.
    """
    check_root(root)

    candidates: list[ScannedPath] = []
    for rel_path in _walk(root, Path(), 0):
        layer = classify(rel_path)
        if layer is None:
            logger.debug("not a candidate: %s", rel_path)
            continue
        logger.debug("classified %s as %s", rel_path, layer.value)
        candidates.append(ScannedPath(path=root / rel_path, relative_path=rel_path, layer=layer))

    return candidates


def read_candidate(scanned: ScannedPath) -> CandidateFile:
    """Read a scanned path into a CandidateFile.

    Raises:
        UnreadableFileError: If the file cannot be opened or is not UTF-8.
    """
    try:
        content = scanned.path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise UnreadableFileError(scanned.path, "not valid UTF-8") from None
    except OSError as e:
        raise UnreadableFileError(scanned.path, e.strerror or str(e)) from None

    return CandidateFile.from_content(
        path=scanned.path,
        relative_path=scanned.relative_path,
        layer=scanned.layer,
        content=content,
    )
