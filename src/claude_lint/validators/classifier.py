"""Path-shape classification of configuration files into layers."""

from __future__ import annotations

from pathlib import PurePath

from claude_lint.validators.base import Layer

ROOT_FILE = "CLAUDE.md"
AGENTS_DIR = "agents"
SKILLS_DIR = "skills"
SKILL_FILE = "SKILL.md"
REFERENCES_DIR = "references"


def _is_markdown_name(name: str) -> bool:
    # A bare ".md" has no stem and is not a named file
    return name.endswith(".md") and len(name) > len(".md")


def classify(relative_path: PurePath) -> Layer | None:
    """Assign a path relative to the configuration root to a layer.

    Shapes are checked in precedence order:

    - ``CLAUDE.md`` -> ROOT
    - ``agents/<name>.md`` -> AGENT
    - ``skills/<name>/SKILL.md`` -> SKILL
    - ``references/<name>.md`` -> REFERENCE
    - ``skills/<name>/references/<name>.md`` -> REFERENCE

    Args:
        relative_path: Path relative to the configuration root.

    Returns:
        The layer for the path, or None if the path is not a candidate.
    """
    parts = relative_path.parts

    if parts == (ROOT_FILE,):
        return Layer.ROOT

    if len(parts) == 2 and parts[0] == AGENTS_DIR and _is_markdown_name(parts[1]):
        return Layer.AGENT

    if len(parts) == 3 and parts[0] == SKILLS_DIR and parts[2] == SKILL_FILE:
        return Layer.SKILL

    if len(parts) == 2 and parts[0] == REFERENCES_DIR and _is_markdown_name(parts[1]):
        return Layer.REFERENCE

    if (
        len(parts) == 4
        and parts[0] == SKILLS_DIR
        and parts[2] == REFERENCES_DIR
        and _is_markdown_name(parts[3])
    ):
        return Layer.REFERENCE

    return None
