"""Shared pytest configuration for wprintf tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests with no external resources")
