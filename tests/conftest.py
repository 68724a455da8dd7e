"""
Global test configuration for storecast.

This module provides global pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep the operator's environment overrides out of every test."""
    for key in (
        "STORECAST_TOTAL_DURATION_SECONDS",
        "STORECAST_BATCH_SIZE",
        "STORECAST_ARTIFACT_DIR",
        "STORECAST_ENV_FILE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
