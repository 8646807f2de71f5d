"""Shared pytest fixtures and configuration for the lecoffre test suite.

Guidelines
----------
* No internet access in any test.
* Storage always lives under ``tmp_path``; ``/tmp/lecoffre.json`` is
  never touched.
* Shell detection is pinned through ``LECOFFRE_SHELL``; tests must not
  depend on the shell running pytest.
* Core tests must be pure, with no side effects.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Clear LECOFFRE_* settings and point storage at a temp file."""
    for name in ("LECOFFRE_SHELL", "LECOFFRE_LOG_LEVEL", "LECOFFRE_STORAGE_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LECOFFRE_STORAGE_PATH", str(tmp_path / "store.json"))


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "store.json"


@pytest.fixture
def seed(store_path: Path) -> Callable[[dict[str, Any]], None]:
    """Write a raw storage document before running a command."""

    def _seed(data: dict[str, Any]) -> None:
        store_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    return _seed


@pytest.fixture
def read_store(store_path: Path) -> Callable[[], dict[str, Any]]:
    """Read the raw storage document back."""

    def _read() -> dict[str, Any]:
        return json.loads(store_path.read_text(encoding="utf-8"))

    return _read
