"""Allow ``python -m claude_lint``."""

from claude_lint.cli import app

if __name__ == "__main__":
    app()
