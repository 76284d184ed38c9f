"""Typed notebook settings parsing.

This module loads and validates the ``notebook.yaml`` file that holds the
descriptive options passed to the notebook template transform.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import (
    DEFAULT_PACKAGE_NAME,
    DEFAULT_PACKAGE_NAMESPACE,
    DEFAULT_PACKAGE_VERSION,
    DEFAULT_THEME,
    SUPPORTED_THEMES,
)
from core.errors import NotebookSettingsError, NotebookSyncError
from core.types import DependencyReference, NotebookSettings
from sync.dependency_reference import parse_dependency_reference

_REQUIRED_KEYS = ("team_name", "season", "year")
_OPTIONAL_KEYS = ("theme", "package")
_NUMERIC_KEYS = ("team_name", "year")


def load_notebook_settings(settings_path: Path) -> NotebookSettings:
    """Load and validate notebook settings from disk.

    Args:
        settings_path: Path to ``notebook.yaml``.

    Returns:
        Fully validated settings.

    Raises:
        NotebookSettingsError: If file is missing, invalid, or schema checks fail.
    """
    payload = _load_yaml_payload(settings_path)
    root_mapping = _expect_mapping(payload, f"settings file {settings_path}")
    _validate_root_keys(root_mapping)
    return NotebookSettings(
        team_name=_required_string(root_mapping, "team_name"),
        season=_required_string(root_mapping, "season"),
        year=_required_string(root_mapping, "year"),
        theme=_parse_theme(root_mapping),
        package=_parse_package(root_mapping),
    )


def default_package_reference() -> DependencyReference:
    """Package reference written when settings do not pin one."""
    return DependencyReference(
        namespace=DEFAULT_PACKAGE_NAMESPACE,
        name=DEFAULT_PACKAGE_NAME,
        version=DEFAULT_PACKAGE_VERSION,
    )


def _load_yaml_payload(settings_path: Path) -> object:
    settings_file = settings_path.expanduser().resolve()
    if not settings_file.exists():
        raise NotebookSettingsError(
            f"Settings file does not exist at {settings_file}. "
            "Create notebook.yaml with team_name, season and year."
        )
    try:
        payload = cast(object, yaml.safe_load(settings_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise NotebookSettingsError(
            f"Failed to read settings at {settings_file}: {error}. "
            "Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise NotebookSettingsError(
            f"Failed to parse YAML settings at {settings_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise NotebookSettingsError(
            f"Settings file at {settings_file} is empty. Define team_name, season and year."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise NotebookSettingsError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise NotebookSettingsError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _validate_root_keys(root_mapping: Mapping[str, object]) -> None:
    unknown_keys = sorted(root_mapping.keys() - set(_REQUIRED_KEYS) - set(_OPTIONAL_KEYS))
    if unknown_keys:
        supported_rows = ", ".join(_REQUIRED_KEYS + _OPTIONAL_KEYS)
        raise NotebookSettingsError(
            f"Unknown settings keys: {', '.join(unknown_keys)}. Use only: {supported_rows}."
        )


def _required_string(root_mapping: Mapping[str, object], key: str) -> str:
    if key not in root_mapping:
        raise NotebookSettingsError(f"Settings missing required field '{key}'.")
    raw_value = root_mapping[key]
    # YAML reads bare numbers such as 2025 or 1234 as integers.
    if key in _NUMERIC_KEYS and isinstance(raw_value, int) and not isinstance(raw_value, bool):
        return str(raw_value)
    if not isinstance(raw_value, str) or not raw_value.strip():
        raise NotebookSettingsError(f"Settings field '{key}' must be a non-empty string.")
    return raw_value.strip()


def _parse_theme(root_mapping: Mapping[str, object]) -> str:
    raw_theme = root_mapping.get("theme", DEFAULT_THEME)
    if raw_theme in SUPPORTED_THEMES:
        return cast(str, raw_theme)
    raise NotebookSettingsError(
        f"Unsupported theme '{raw_theme}'. Use one of: {', '.join(SUPPORTED_THEMES)}."
    )


def _parse_package(root_mapping: Mapping[str, object]) -> DependencyReference:
    raw_package = root_mapping.get("package")
    if raw_package is None:
        return default_package_reference()
    if not isinstance(raw_package, str):
        raise NotebookSettingsError(
            "Settings field 'package' must be a string like '@local/notebookinator:1.0.1'."
        )
    try:
        return parse_dependency_reference(raw_package)
    except NotebookSyncError as error:
        raise NotebookSettingsError(str(error)) from error
