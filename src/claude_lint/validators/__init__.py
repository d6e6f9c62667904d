"""Validation engine for claude configuration trees.

Scans a configuration root, classifies files into layers and applies each
layer's checks.
"""

from __future__ import annotations

from claude_lint.validators.base import (
    CandidateFile,
    Check,
    Diagnostic,
    Layer,
    LintError,
    RootNotFoundError,
    ValidationResult,
)
from claude_lint.validators.classifier import classify
from claude_lint.validators.rules import DEFAULT_RULES, STRICT_RULES, build_rule_table
from claude_lint.validators.runner import ValidationRunner, validate_tree
from claude_lint.validators.scanner import (
    ScannedPath,
    UnreadableFileError,
    read_candidate,
    scan_candidates,
)

__all__ = [
    # Base types
    "CandidateFile",
    "Check",
    "Diagnostic",
    "Layer",
    "LintError",
    "RootNotFoundError",
    "ValidationResult",
    # Scanning
    "ScannedPath",
    "UnreadableFileError",
    "classify",
    "read_candidate",
    "scan_candidates",
    # Rules
    "DEFAULT_RULES",
    "STRICT_RULES",
    "build_rule_table",
    # Runner
    "ValidationRunner",
    "validate_tree",
]
