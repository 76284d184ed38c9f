"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_notebook_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear notebook environment overrides set by the developer shell."""
    for variable in (
        "NOTEBOOK_ROOT",
        "NOTEBOOK_PACKAGE_CACHE",
        "NOTEBOOK_TYPST_BIN",
        "NOTEBOOK_PACKAGE_NAMESPACE",
        "NOTEBOOK_PACKAGE_NAME",
    ):
        monkeypatch.delenv(variable, raising=False)
