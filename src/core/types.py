"""Shared typed models.

This module defines immutable data models used by sync, compose,
entries, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Literal

from core.constants import DEFAULT_ENTRY_SECTION, DEFAULT_THEME

CompositionIssueKind = Literal[
    "missing-config",
    "missing-package-reference",
    "missing-package-version",
    "missing-main",
    "section-order",
    "missing-include",
]


@dataclass(frozen=True)
class DependencyReference:
    """Versioned reference to a Typst package.

    Attributes:
        namespace: Package namespace, e.g. ``local``.
        name: Package name, e.g. ``notebookinator``.
        version: Version triplet ``MAJOR.MINOR.PATCH``.
    """

    namespace: str
    name: str
    version: str

    @property
    def spec(self) -> str:
        """Typst import specifier for this reference."""
        return f"@{self.namespace}/{self.name}:{self.version}"


@dataclass(frozen=True)
class VersionSyncResult:
    """Outcome of one version-sync run.

    Attributes:
        config_path: Config file that was synchronized.
        selected_version: Version directory name written into the config.
        previous_versions: Versions referenced before the rewrite.
        replacements: Number of references rewritten.
        changed: Whether file content changed on disk.
    """

    config_path: Path
    selected_version: str
    previous_versions: tuple[str, ...]
    replacements: int
    changed: bool


@dataclass(frozen=True)
class NotebookSettings:
    """Descriptive options passed to the notebook template transform.

    Attributes:
        team_name: Team identifier printed on the cover.
        season: Season label.
        year: Year range label, e.g. ``2024-2025``.
        package: Pinned template package reference.
        theme: Theme name shipped by the template package.
    """

    team_name: str
    season: str
    year: str
    package: DependencyReference
    theme: str = DEFAULT_THEME


@dataclass(frozen=True)
class CompositionIssue:
    """One problem that would make the renderer fail at load time."""

    kind: CompositionIssueKind
    path: Path
    message: str


@dataclass(frozen=True)
class CompositionReport:
    """Result of checking a notebook project before rendering."""

    root: Path
    issues: tuple[CompositionIssue, ...]

    @property
    def ok(self) -> bool:
        """Whether no issue was found."""
        return not self.issues


@dataclass(frozen=True)
class EntryRequest:
    """User input for a new notebook entry.

    Attributes:
        title: Entry title; ``/`` separators nest the entry directory.
        entry_type: Entry type name defined by the theme.
        entry_date: Date shown on the entry.
        author: Entry author.
        witness: Optional witness name, may be empty.
        section: Notebook section the entry belongs to.
    """

    title: str
    entry_type: str
    entry_date: date
    author: str
    witness: str = ""
    section: str = DEFAULT_ENTRY_SECTION


@dataclass(frozen=True)
class EntryType:
    """Entry type exposed by a theme, with its display colour."""

    name: str
    color: tuple[int, int, int]
