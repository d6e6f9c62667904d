"""claude-lint - layering checks for .claude/ context directories."""

__version__ = "0.1.0"
