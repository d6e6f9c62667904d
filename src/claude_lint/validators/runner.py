"""Validation runner for a claude configuration tree.

Scans the root, reads each candidate file, applies its layer's checks and
collects every diagnostic in a single sequential pass.
"""

from __future__ import annotations

import logging
from pathlib import Path

from claude_lint.config import LintConfig
from claude_lint.validators.base import (
    CandidateFile,
    Check,
    Diagnostic,
    Layer,
    ValidationResult,
)
from claude_lint.validators.rules import build_rule_table
from claude_lint.validators.scanner import (
    UnreadableFileError,
    read_candidate,
    scan_candidates,
)

logger = logging.getLogger(__name__)


class ValidationRunner:
    """Runs the layer checks over a configuration root.

    Attributes:
        root: Configuration root as given by the user.
        config: Active configuration.
        rules: Rule table used to look up each layer's checks.
    """

    def __init__(
        self,
        root: Path,
        config: LintConfig | None = None,
        rules: dict[Layer, tuple[Check, ...]] | None = None,
    ) -> None:
        """Initialize validation runner.

        Args:
            root: Configuration root directory.
            config: Configuration to use. Defaults to LintConfig().
            rules: Rule table override. Defaults to the table for
                ``config.strict``.
        """
        self.root = root
        self.config = config or LintConfig()
        self.rules = rules if rules is not None else build_rule_table(self.config.strict)

    def run(self) -> ValidationResult:
        """Validate every candidate file under the root.

        Returns:
            ValidationResult with diagnostics in discovery order.

        Raises:
            RootNotFoundError: If the root is missing or not a directory.
        """
        result = ValidationResult(root=self.root)

        for scanned in scan_candidates(self.root):
            result.files_checked += 1
            try:
                candidate = read_candidate(scanned)
            except UnreadableFileError as e:
                logger.debug("cannot read %s: %s", scanned.path, e.reason)
                result.diagnostics.append(
                    Diagnostic(
                        path=scanned.path,
                        message=str(e),
                        check="unreadable",
                        layer=scanned.layer,
                    )
                )
                continue

            diagnostics = self.validate_file(candidate)
            logger.debug("%s: %d diagnostic(s)", candidate.path, len(diagnostics))
            result.diagnostics.extend(diagnostics)

        return result

    def validate_file(self, candidate: CandidateFile) -> list[Diagnostic]:
        """Apply every check of the candidate's layer, in order.

        A failing check does not stop later checks. An exception raised by
        a check is reported as a diagnostic for that check.

        Args:
            candidate: File to validate.

        Returns:
            Diagnostics for the file, in check order.
        """
        diagnostics: list[Diagnostic] = []

        for check in self.rules.get(candidate.layer, ()):
            try:
                messages = check(candidate, self.config)
            except Exception as e:
                messages = [f"check '{check.name}' failed: {e!s}"]

            diagnostics.extend(
                Diagnostic(
                    path=candidate.path,
                    message=message,
                    check=check.name,
                    layer=candidate.layer,
                )
                for message in messages
            )

        return diagnostics


def validate_tree(root: Path, config: LintConfig | None = None) -> ValidationResult:
    """Validate a configuration root with the rules implied by ``config``.

    Args:
        root: Configuration root directory.
        config: Configuration to use. Defaults to LintConfig().

    Returns:
        ValidationResult for the whole tree.

    Raises:
        RootNotFoundError: If the root is missing or not a directory.
    """
    return ValidationRunner(root, config).run()
