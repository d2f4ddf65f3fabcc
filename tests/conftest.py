"""
Shared test configuration.
It pins the environment the gateway reads so settings-dependent tests stay deterministic.
These tests are executed by `pytest` locally and in CI.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from api_gateway.common import settings as settings_module  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against default settings in test mode."""

    for key in settings_module.DEFAULTS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("ENV_FILE", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("LOG_LEVEL", "info")
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()
