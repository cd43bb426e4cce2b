"""Code quality commands."""

import subprocess
import sys

SOURCE_DIRS = ["app/", "cli/", "tests/"]


def _ruff(*args: str) -> int:
    command = [sys.executable, "-m", "ruff", *args, *SOURCE_DIRS]
    return subprocess.run(command, check=False).returncode


def main() -> None:
    """Run ruff linter."""
    sys.exit(_ruff("check"))


def format_code() -> None:
    """Run ruff formatter."""
    sys.exit(_ruff("format"))
