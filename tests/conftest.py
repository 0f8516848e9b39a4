"""Pytest configuration and fixtures for jstor_import tests."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from jstor_import.logging import set_log_level


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Set up logging for tests."""
    set_log_level("DEBUG")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)
