"""Notebook exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class NotebookError(Exception):
    """Base exception for all notebook tooling failures."""


class NotebookConfigError(NotebookError):
    """Raised for invalid runtime configuration."""


class NotebookSyncError(NotebookError):
    """Raised when the package version cannot be synchronized."""


class NotebookSettingsError(NotebookError):
    """Raised for missing or malformed notebook settings files."""


class NotebookCompositionError(NotebookError):
    """Raised when notebook documents cannot be written or composed."""


class NotebookRenderError(NotebookError):
    """Raised when the external Typst renderer fails."""


class NotebookEntryError(NotebookError):
    """Raised for entry scaffolding and entry-type metadata failures."""
