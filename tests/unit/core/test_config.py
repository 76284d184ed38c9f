"""Unit tests for core config parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import NotebookConfig
from core.errors import NotebookConfigError


def test_from_env_reads_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve the notebook root from environment."""
    monkeypatch.setenv("NOTEBOOK_ROOT", "./.tmp-notebook")

    config = NotebookConfig.from_env()

    assert config.root.name == ".tmp-notebook"


def test_from_env_defaults_to_local_notebookinator() -> None:
    """Default config should point at the local notebookinator package."""
    config = NotebookConfig.from_env()

    assert config.package_dir.parts[-2:] == ("local", "notebookinator")


def test_package_dir_joins_cache_namespace_and_name(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Package directory should live under cache/namespace/name."""
    monkeypatch.setenv("NOTEBOOK_PACKAGE_CACHE", str(tmp_path))
    monkeypatch.setenv("NOTEBOOK_PACKAGE_NAMESPACE", "preview")
    monkeypatch.setenv("NOTEBOOK_PACKAGE_NAME", "notebookinator")

    config = NotebookConfig.from_env()

    assert config.package_dir == tmp_path.resolve() / "preview" / "notebookinator"


def test_config_path_is_packages_file_under_root(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Config file path should be packages.typ inside the root."""
    monkeypatch.setenv("NOTEBOOK_ROOT", str(tmp_path))

    config = NotebookConfig.from_env()

    assert config.config_path == tmp_path.resolve() / "packages.typ"


def test_from_env_raises_for_invalid_package_name(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a package name with path separators."""
    monkeypatch.setenv("NOTEBOOK_PACKAGE_NAME", "../escape")

    with pytest.raises(NotebookConfigError):
        NotebookConfig.from_env()


def test_from_env_raises_for_blank_typst_bin(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail when the typst executable is blank."""
    monkeypatch.setenv("NOTEBOOK_TYPST_BIN", "   ")

    with pytest.raises(NotebookConfigError):
        NotebookConfig.from_env()
