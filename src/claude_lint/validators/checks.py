"""Layer checks for claude-lint.

Every check takes a CandidateFile and the active LintConfig and returns a
list of violation messages (empty when the check passes). Checks never
touch the file system except ``check_references_section``, which looks for
a sibling ``references/`` directory.

Forbidden patterns:
- Workflow verbs: step markers, sequencing openers, "must then"
- Procedural sections: Procedure / Workflow / Steps headings
- Fenced code blocks
- Success criteria terms

Structural checks:
- Line limits (agents, skills)
- Optional declaration (references)
- Frontmatter, Capability and References sections (strict mode)
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from claude_lint.validators.base import CandidateFile, Check, split_lines
from claude_lint.validators.markdown_parser import FrontmatterError, MarkdownParser

if TYPE_CHECKING:
    from claude_lint.config import LintConfig

NUMBER_WORDS = ("one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten")

SEQUENCING_WORDS = (
    "first",
    "second",
    "third",
    "then",
    "next",
    "finally",
    "lastly",
    "afterwards",
    "afterward",
    "subsequently",
)

# "step 1", "Step two"
STEP_PATTERN = re.compile(
    rf"\bstep\s+(\d+|{'|'.join(NUMBER_WORDS)})\b",
    re.IGNORECASE,
)

# "First, ..." at the start of a line (optionally a heading, bulleted or
# numbered) or right after a sentence terminator, possibly wrapped in
# emphasis, quotes or a parenthesis
SEQUENCE_PATTERN = re.compile(
    r"(?:^[ \t]*(?:#{1,6}[ \t]+)?(?:(?:[-*+>]|\d+[.)])[ \t]+)?|[.!?:;][ \t]+)"
    r"[*_\"'“‘(\[]*"
    rf"({'|'.join(SEQUENCING_WORDS)}),",
    re.IGNORECASE | re.MULTILINE,
)

MUST_THEN_PATTERN = re.compile(r"\bmust\s+then\b", re.IGNORECASE)

PROCEDURAL_HEADING_PATTERN = re.compile(r"^(procedures?|workflows?|steps)\b", re.IGNORECASE)

SUCCESS_CRITERIA_TERMS = (
    "success criteria",
    "done when",
    "definition of done",
    "acceptance criteria",
    "must ensure",
    "must verify",
    "you must",
    "requirement:",
    "requirements:",
)

OPTIONAL_PATTERN = re.compile(r"\boptional\b", re.IGNORECASE)


def find_workflow_verbs(content: str) -> list[str]:
    """Find workflow signatures in order of first appearance.

    Args:
        content: Text to scan.

    Returns:
        Distinct normalised signatures (e.g. "step 1", "first,", "must then").
    """
    found: list[tuple[int, str]] = []

    for match in STEP_PATTERN.finditer(content):
        found.append((match.start(), f"step {match.group(1).lower()}"))
    for match in SEQUENCE_PATTERN.finditer(content):
        found.append((match.start(1), f"{match.group(1).lower()},"))
    for match in MUST_THEN_PATTERN.finditer(content):
        found.append((match.start(), "must then"))

    signatures: list[str] = []
    for _, signature in sorted(found):
        if signature not in signatures:
            signatures.append(signature)
    return signatures


def check_workflow_verbs(candidate: CandidateFile, config: LintConfig) -> list[str]:
    """Reject step-by-step instructions in non-procedural layers."""
    return [
        f"contains workflow verb '{signature}'"
        for signature in find_workflow_verbs(candidate.content)
    ]


def check_procedural_sections(candidate: CandidateFile, config: LintConfig) -> list[str]:
    """Reject Procedure, Workflow and Steps headings."""
    return [
        f"contains procedural section '{heading.text}'"
        for heading in MarkdownParser.extract_headings(candidate.content)
        if PROCEDURAL_HEADING_PATTERN.match(heading.text)
    ]


def check_fenced_code(candidate: CandidateFile, config: LintConfig) -> list[str]:
    """Reject fenced code blocks (backtick or tilde fences)."""
    if "```" in candidate.content or MarkdownParser.fence_lines(candidate.content):
        return ["contains fenced code block"]
    return []


def check_success_criteria(candidate: CandidateFile, config: LintConfig) -> list[str]:
    """Reject completion tests in capability descriptions."""
    lower = candidate.content.lower()
    return [
        f"contains success criteria term '{term}'"
        for term in SUCCESS_CRITERIA_TERMS
        if term in lower
    ]


def _line_limit(candidate: CandidateFile, limit: int) -> list[str]:
    if candidate.line_count > limit:
        return [f"too long ({candidate.line_count} lines, max {limit})"]
    return []


def check_agent_length(candidate: CandidateFile, config: LintConfig) -> list[str]:
    return _line_limit(candidate, config.agent_max_lines)


def check_skill_length(candidate: CandidateFile, config: LintConfig) -> list[str]:
    return _line_limit(candidate, config.skill_max_lines)


def check_optional_declaration(candidate: CandidateFile, config: LintConfig) -> list[str]:
    """Require references to state that they are optional near the top."""
    window = config.reference_header_lines
    head = "\n".join(split_lines(candidate.content)[:window])
    if OPTIONAL_PATTERN.search(head):
        return []
    return [f"missing optional declaration ('optional' not found in the first {window} lines)"]


def check_frontmatter(candidate: CandidateFile, config: LintConfig) -> list[str]:
    """Require a leading YAML frontmatter mapping."""
    try:
        data = MarkdownParser.parse_frontmatter(candidate.content)
    except FrontmatterError as e:
        return [f"invalid YAML frontmatter: {e}"]
    if data is None:
        return ["missing YAML frontmatter"]
    return []


def check_capability_section(candidate: CandidateFile, config: LintConfig) -> list[str]:
    if MarkdownParser.has_heading(candidate.content, "Capability", level=2):
        return []
    return ["missing '## Capability' section"]


def check_references_section(candidate: CandidateFile, config: LintConfig) -> list[str]:
    """Require a References section when the skill ships a references/ dir."""
    if not (candidate.path.parent / "references").is_dir():
        return []
    if MarkdownParser.has_heading(candidate.content, "References", level=2):
        return []
    return ["has references/ but no '## References' section"]


WORKFLOW_VERBS = Check("workflow_verbs", check_workflow_verbs)
PROCEDURAL_SECTIONS = Check("procedural_sections", check_procedural_sections)
FENCED_CODE = Check("fenced_code", check_fenced_code)
SUCCESS_CRITERIA = Check("success_criteria", check_success_criteria)
AGENT_LINE_LIMIT = Check("line_limit", check_agent_length)
SKILL_LINE_LIMIT = Check("line_limit", check_skill_length)
OPTIONAL_DECLARATION = Check("optional_declaration", check_optional_declaration)
FRONTMATTER = Check("frontmatter", check_frontmatter)
CAPABILITY_SECTION = Check("capability_section", check_capability_section)
REFERENCES_SECTION = Check("references_section", check_references_section)
