"""Shared test fixtures for the pathmetrics test suite."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config lookup at an empty home so user config never leaks in."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("PATHMETRICS_CONFIG", raising=False)
    return home


@pytest.fixture
def exclusion_config(tmp_path: Path) -> Path:
    """Write an exclusion config with one rule of each kind."""
    path = tmp_path / "excluded_paths.yml"
    path.write_text(
        "excluded_paths:\n"
        "  - exact: /health\n"
        "  - prefix: /rails/active_storage\n"
        "  - pattern: ^/api/v[0-9]+/internal\n",
        encoding="utf-8",
    )
    return path
