"""Public SDK surface for notebook tooling.

This module provides a stable import path for scripts and hooks.
It re-exports the version sync, composition, and entry operations.
"""

from __future__ import annotations

from compose.composition_check import check_composition
from compose.documents import (
    parse_includes,
    render_main_document,
    render_packages_document,
    write_notebook_documents,
)
from compose.settings_file import load_notebook_settings
from compose.typst_runner import render_notebook
from core.config import NotebookConfig
from core.types import (
    CompositionReport,
    DependencyReference,
    EntryRequest,
    EntryType,
    NotebookSettings,
    VersionSyncResult,
)
from entries.entry_scaffold import create_entry
from entries.entry_types import query_entry_type_metadata, select_entry_types
from sync.package_cache import list_installed_versions, select_version
from sync.version_sync import sync_package_version

__all__ = [
    "CompositionReport",
    "DependencyReference",
    "EntryRequest",
    "EntryType",
    "NotebookConfig",
    "NotebookSettings",
    "VersionSyncResult",
    "check_composition",
    "create_entry",
    "list_installed_versions",
    "load_notebook_settings",
    "parse_includes",
    "query_entry_type_metadata",
    "render_main_document",
    "render_notebook",
    "render_packages_document",
    "select_entry_types",
    "select_version",
    "sync_package_version",
    "write_notebook_documents",
]
