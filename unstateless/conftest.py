"""Shared fixtures for unstateless tests."""

import pytest

from unstateless.state.store import GlobalStore, reset_store


@pytest.fixture(autouse=True)
def reset_global_store(monkeypatch):
    """Reset the global store before each test to prevent state leakage."""
    for name in ("STORAGE", "DB_PATH", "NAMESPACE", "LOG_DIR"):
        monkeypatch.delenv(f"UNSTATELESS_{name}", raising=False)
    reset_store()
    yield
    reset_store()


@pytest.fixture
def store():
    """Provide a fresh GlobalStore instance for tests that need it."""
    s = GlobalStore()
    yield s
    s.close()
