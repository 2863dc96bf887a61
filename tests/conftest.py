"""
Shared test configuration.
It seeds the environment the API needs at import time and guards it per test.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_ENV_DEFAULTS = {
    "PROJECT_NAME": "clinic-site-test",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
    "DATABASE_URL": "sqlite://",
    "JWT_SECRET_KEY": "test-secret-key",
    "API_HOST": "0.0.0.0",
    "API_PORT": "8000",
}

# The application module builds its app at import, so defaults must exist before collection.
for _key, _value in TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)
os.environ.setdefault("API_MEDIA_ROOT", tempfile.mkdtemp(prefix="clinic-site-media-"))


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in TEST_ENV_DEFAULTS.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)
