"""Configuration management for the claude-lint CLI tool.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .claudelintrc > pyproject.toml > defaults
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

RC_FILENAME = ".claudelintrc"
PYPROJECT_SECTION = "claude-lint"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass
class LintConfig:
    """Configuration for the claude-lint CLI tool.

    Attributes:
        root: Configuration root to validate (default: ".claude")
        agent_max_lines: Line ceiling for agents/*.md (default: 120)
        skill_max_lines: Line ceiling for skills/*/SKILL.md (default: 500)
        reference_header_lines: Number of leading lines of a reference file
            searched for the "optional" declaration (default: 15)
        strict: Enable frontmatter and section checks (default: False)
    """

    root: str = ".claude"
    agent_max_lines: int = 120
    skill_max_lines: int = 500
    reference_header_lines: int = 15
    strict: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if not self.root or not isinstance(self.root, str):
            raise ValueError("root must be a non-empty string")

        for name in ("agent_max_lines", "skill_max_lines", "reference_header_lines"):
            value = getattr(self, name)
            # bool is an int subclass, reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer")

        if not isinstance(self.strict, bool):
            raise ValueError("strict must be a boolean")

    def get_root_path(self) -> Path:
        """Get the configured root as a Path (not resolved)."""
        return Path(self.root)


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names.

    Returns:
        Set of field names from LintConfig.
    """
    return {f.name for f in fields(LintConfig)}


def find_config_file(filename: str = RC_FILENAME, start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Searches for the specified file starting from start_dir (or current directory)
    and traversing up to the filesystem root.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = start_dir or Path.cwd()
    current = current.resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Accept kebab-case keys and drop unknown ones."""
    valid_fields = _get_config_field_names()
    normalized = {k.replace("-", "_"): v for k, v in data.items()}
    return {k: v for k, v in normalized.items() if k in valid_fields}


def _load_from_rc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the .claudelintrc file.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Dictionary containing configuration from .claudelintrc, or empty dict if not found.
    """
    config_path = find_config_file(RC_FILENAME, start_dir)
    if config_path is None:
        return {}

    try:
        return _normalize_keys(_load_toml_file(config_path))
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from pyproject.toml [tool.claude-lint] section.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Dictionary containing configuration from pyproject.toml, or empty dict if not found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
        section = data.get("tool", {}).get(PYPROJECT_SECTION, {})
        return _normalize_keys(section)
    except (tomllib.TOMLDecodeError, OSError, AttributeError):
        return {}


def _parse_bool(env_var: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{env_var} must be a boolean, got {value!r}")


def _parse_int(env_var: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"{env_var} must be an integer, got {value!r}") from None


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    Environment variables are prefixed with CLAUDE_LINT_ and use uppercase
    names, e.g. CLAUDE_LINT_ROOT, CLAUDE_LINT_AGENT_MAX_LINES,
    CLAUDE_LINT_STRICT.

    Returns:
        Dictionary containing configuration from environment variables.

    Raises:
        ValueError: If a numeric or boolean variable cannot be parsed.
    """
    result: dict[str, Any] = {}

    value = os.environ.get("CLAUDE_LINT_ROOT")
    if value is not None:
        result["root"] = value

    for config_key in ("agent_max_lines", "skill_max_lines", "reference_header_lines"):
        env_var = f"CLAUDE_LINT_{config_key.upper()}"
        value = os.environ.get(env_var)
        if value is not None:
            result[config_key] = _parse_int(env_var, value)

    value = os.environ.get("CLAUDE_LINT_STRICT")
    if value is not None:
        result["strict"] = _parse_bool("CLAUDE_LINT_STRICT", value)

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge multiple configuration dictionaries.

    Later dictionaries take precedence over earlier ones.
    """
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> LintConfig:
    """Load configuration with full precedence chain.

    Loads configuration from multiple sources and merges them with the following
    precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (CLAUDE_LINT_*)
    3. .claudelintrc file
    4. pyproject.toml [tool.claude-lint] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved LintConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    pyproject_config = _load_from_pyproject(start_dir)
    rc_config = _load_from_rc(start_dir)
    env_config = _load_from_env()
    cli_config = cli_overrides or {}

    # Filter CLI overrides to only valid fields
    valid_fields = _get_config_field_names()
    cli_config = {k: v for k, v in cli_config.items() if k in valid_fields and v is not None}

    merged = _merge_configs(
        pyproject_config,
        rc_config,
        env_config,
        cli_config,
    )

    # Defaults are applied by the dataclass
    return LintConfig(**merged)
