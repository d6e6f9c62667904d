"""Rule tables mapping each layer to its ordered checks.

Check order within a layer is the order diagnostics are reported for a
file.
"""

from __future__ import annotations

from collections.abc import Mapping

from claude_lint.validators.base import Check, Layer
from claude_lint.validators.checks import (
    AGENT_LINE_LIMIT,
    CAPABILITY_SECTION,
    FENCED_CODE,
    FRONTMATTER,
    OPTIONAL_DECLARATION,
    PROCEDURAL_SECTIONS,
    REFERENCES_SECTION,
    SKILL_LINE_LIMIT,
    SUCCESS_CRITERIA,
    WORKFLOW_VERBS,
)

RuleTable = Mapping[Layer, tuple[Check, ...]]

DEFAULT_RULES: RuleTable = {
    Layer.ROOT: (WORKFLOW_VERBS, PROCEDURAL_SECTIONS, FENCED_CODE),
    Layer.AGENT: (WORKFLOW_VERBS, PROCEDURAL_SECTIONS, AGENT_LINE_LIMIT, FENCED_CODE),
    Layer.SKILL: (SKILL_LINE_LIMIT, FENCED_CODE, SUCCESS_CRITERIA),
    Layer.REFERENCE: (OPTIONAL_DECLARATION,),
}

# Appended to the default checks when strict mode is on
STRICT_RULES: RuleTable = {
    Layer.ROOT: (),
    Layer.AGENT: (FRONTMATTER,),
    Layer.SKILL: (FRONTMATTER, CAPABILITY_SECTION, REFERENCES_SECTION),
    Layer.REFERENCE: (),
}


def build_rule_table(strict: bool = False) -> dict[Layer, tuple[Check, ...]]:
    """Compose the rule table for a run.

    Args:
        strict: Whether to include the strict-mode structural checks.

    Returns:
        Mapping with an entry for every layer.
    """
    table = dict(DEFAULT_RULES)
    if strict:
        for layer, extra in STRICT_RULES.items():
            table[layer] = table[layer] + extra
    return table
