"""Test runner commands."""

import subprocess
import sys


def _pytest(*args: str) -> int:
    return subprocess.run([sys.executable, "-m", "pytest", *args], check=False).returncode


def main() -> None:
    """Run unit tests."""
    sys.exit(_pytest("tests/unit", "-v", "--tb=short"))


def test_integration() -> None:
    """Run integration tests; they skip unless DATABASE_URL_APP is set."""
    sys.exit(_pytest("tests/integration", "-v", "--tb=short", "-m", "integration"))


def test_all() -> None:
    sys.exit(_pytest("tests/", "-v", "--tb=short"))
