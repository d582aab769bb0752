"""
Root-level shared test fixtures.

Inherited by the op, tui and top-level test suites.
"""

from __future__ import annotations

import pytest

from oplauncher.config import reset_config


@pytest.fixture
def clean_env(monkeypatch):
    """Remove oplauncher and op session env vars that leak between tests."""
    import os

    for key in list(os.environ):
        if key.startswith(("OPLAUNCHER_", "OP_SESSION_")):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fresh_config(clean_env, tmp_path, monkeypatch):
    """Config singleton built from an empty environment and no config file."""
    monkeypatch.setenv("OPLAUNCHER_CONFIG", str(tmp_path / "no-config.yaml"))
    reset_config()
    yield
    reset_config()
