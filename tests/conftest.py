"""
Monster Tokenizer - Test Configuration
======================================

Shared fixtures for the tokenizer tests.

It provides:
- Paths to the project root and the sample scripts
- A factory fixture for writing throwaway script files
"""

from pathlib import Path
from typing import Callable, Union

import pytest


# ═══════════════════════════════════════════════════════════════════════════════
# PATH FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture(scope="session")
def project_root() -> Path:
    """
    Fixture: Get project root directory.

    Returns the absolute path to the project root (where pyproject.toml is).
    """
    current = Path(__file__).parent.parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def examples_dir(project_root: Path) -> Path:
    """
    Fixture: Get the sample scripts directory.
    """
    return project_root / "examples"


# ═══════════════════════════════════════════════════════════════════════════════
# SCRIPT FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    """
    Fixture: Write a script into a temporary directory.

    Text is written as UTF-8; bytes are written unchanged, which allows
    tests to add byte order marks or invalid sequences.

    Usage:
        def test_something(write_script):
            path = write_script("x = 1\\n")
    """
    def _write(content: Union[str, bytes], name: str = "script.mn") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write
