"""Line-level markdown helpers for claude-lint checks.

Extracts headings, fence markers and YAML frontmatter from markdown text.
Uses only regex and line matching (no markdown AST).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import yaml

from claude_lint.validators.base import split_lines


@dataclass
class MarkdownHeading:
    """A markdown ATX heading.

    Attributes:
        text: The heading text (without the # prefix).
        level: The heading level (1 for #, 2 for ##, etc.).
        line: 1-based line number of the heading.
    """

    text: str
    level: int
    line: int


class FrontmatterError(ValueError):
    """Raised when a frontmatter block is present but not a YAML mapping."""


class MarkdownParser:
    """Parse markdown content for the layer checks.

    All methods are static and stateless.
    """

    # Regex patterns
    _HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})\s+(.+?)(?:\s+#+)?\s*$")
    _FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
    _FRONTMATTER_DELIMITER = "---"

    @staticmethod
    def extract_headings(content: str) -> list[MarkdownHeading]:
        """Extract all ATX headings, skipping those inside fenced blocks.

        Args:
            content: Markdown content to parse.

        Returns:
            Headings in document order.
        """
        headings: list[MarkdownHeading] = []
        in_fence = False

        for number, line in enumerate(split_lines(content), start=1):
            if MarkdownParser._FENCE_PATTERN.match(line):
                in_fence = not in_fence
                continue
            if in_fence:
                continue

            match = MarkdownParser._HEADING_PATTERN.match(line)
            if match:
                headings.append(
                    MarkdownHeading(
                        text=match.group(2).strip(),
                        level=len(match.group(1)),
                        line=number,
                    )
                )

        return headings

    @staticmethod
    def has_heading(content: str, text: str, level: int | None = None) -> bool:
        """Check whether a heading with the given text exists.

        Args:
            content: Markdown content to search.
            text: Heading text to match (case-insensitive, exact).
            level: Optional heading level the match must have.

        Returns:
            True if a matching heading exists.
        """
        wanted = text.lower()
        return any(
            h.text.lower() == wanted and (level is None or h.level == level)
            for h in MarkdownParser.extract_headings(content)
        )

    @staticmethod
    def fence_lines(content: str) -> list[int]:
        """Return 1-based line numbers of fence delimiter lines.

        A fence delimiter is three or more backticks or tildes at the start
        of a line, after at most three spaces of indentation.
        """
        return [
            number
            for number, line in enumerate(split_lines(content), start=1)
            if MarkdownParser._FENCE_PATTERN.match(line)
        ]

    @staticmethod
    def split_frontmatter(content: str) -> tuple[str, str] | None:
        """Split a leading ``---`` delimited block from the body.

        Args:
            content: Markdown content.

        Returns:
            Tuple of (frontmatter text, body), or None if the content does
            not start with a closed frontmatter block.
        """
        lines = content.splitlines(keepends=True)
        if not lines or lines[0].rstrip("\r\n") != MarkdownParser._FRONTMATTER_DELIMITER:
            return None

        for i in range(1, len(lines)):
            if lines[i].rstrip("\r\n") == MarkdownParser._FRONTMATTER_DELIMITER:
                return "".join(lines[1:i]), "".join(lines[i + 1 :])

        return None

    @staticmethod
    def parse_frontmatter(content: str) -> dict[str, Any] | None:
        """Parse the YAML frontmatter block of a document.

        Args:
            content: Markdown content.

        Returns:
            The frontmatter mapping, or None if there is no frontmatter.

        Raises:
            FrontmatterError: If the block is not valid YAML or not a mapping.
        """
        split = MarkdownParser.split_frontmatter(content)
        if split is None:
            return None

        try:
            data = yaml.safe_load(split[0])
        except yaml.YAMLError as e:
            problem = getattr(e, "problem", None) or "could not parse"
            raise FrontmatterError(problem) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise FrontmatterError("expected a mapping")
        return data
