"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the home directory to a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return home


@pytest.fixture
def sync_root(tmp_path: Path) -> Path:
    """Create an empty synchronization root."""
    root = tmp_path / ".pact"
    root.mkdir()
    return root


@pytest.fixture
def write_manifest() -> Callable[[Path, dict[str, Any]], Path]:
    """Return a helper that writes pact.json into a synchronization root."""

    def _write(root: Path, data: dict[str, Any]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        path = root / "pact.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mock_ollama_list_output() -> str:
    """Sample ``ollama list`` output."""
    return """NAME              ID              SIZE      MODIFIED
llama3:latest     365c0bd3c000    4.7 GB    2 days ago
qwen2.5-coder:7b  2b0496514337    4.7 GB    3 weeks ago
llama3:70b        786f3184aec0    39 GB     5 weeks ago"""


@pytest.fixture
def pact_dir(tmp_path: Path, fake_home: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from ``tmp_path`` so ``tmp_path/.pact`` is the discovered root.

    The directory itself is not created.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path / ".pact"
