"""Local Typst package cache inspection.

This module lists installed template package versions and picks the
one the notebook config file should be pinned to.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

from core.constants import DEFAULT_VERSION_STRATEGY, VERSION_STRATEGIES
from core.errors import NotebookSyncError

_VERSION_TRIPLET_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


def list_installed_versions(package_dir: Path) -> tuple[str, ...]:
    """List version directories of one installed package.

    Entries are sorted by name, which matches the default ``ls`` order
    in the C locale. Hidden directories are skipped as ``ls`` does.

    Args:
        package_dir: Package directory inside the cache.

    Returns:
        Sorted subdirectory names.

    Raises:
        NotebookSyncError: If the directory is missing or not a directory.
    """
    if not package_dir.exists():
        raise NotebookSyncError(
            f"Package directory not found at {package_dir}. "
            "Install the template package into the local Typst package cache."
        )
    if not package_dir.is_dir():
        raise NotebookSyncError(
            f"Package path {package_dir} is not a directory. "
            "Point NOTEBOOK_PACKAGE_CACHE at the Typst package cache root."
        )
    return tuple(
        sorted(
            entry.name
            for entry in package_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        )
    )


def select_version(versions: Sequence[str], strategy: str = DEFAULT_VERSION_STRATEGY) -> str:
    """Pick the version to pin from an installed version listing.

    Args:
        versions: Version directory names in listing order.
        strategy: ``first`` for the first listed entry, ``highest`` for
            the highest ``MAJOR.MINOR.PATCH`` entry.

    Returns:
        Selected version directory name.

    Raises:
        NotebookSyncError: If the listing is empty, the strategy is
            unknown, or no entry is a version triplet under ``highest``.
    """
    if strategy not in VERSION_STRATEGIES:
        raise NotebookSyncError(
            f"Unsupported version strategy '{strategy}'. "
            f"Use one of: {', '.join(VERSION_STRATEGIES)}."
        )
    if not versions:
        raise NotebookSyncError(
            "No installed package versions found. "
            "Install the template package before syncing the config file."
        )
    if strategy == "first":
        return versions[0]
    triplets = [version for version in versions if is_version_triplet(version)]
    if not triplets:
        raise NotebookSyncError(
            f"No MAJOR.MINOR.PATCH version among installed entries: {', '.join(versions)}."
        )
    return max(triplets, key=version_key)


def version_key(version: str) -> tuple[int, int, int]:
    """Numeric sort key for a ``MAJOR.MINOR.PATCH`` string.

    Args:
        version: Version triplet.

    Returns:
        Integer components.

    Raises:
        NotebookSyncError: If version is not a triplet.
    """
    match = _VERSION_TRIPLET_PATTERN.match(version)
    if match is None:
        raise NotebookSyncError(f"Invalid version '{version}': expected MAJOR.MINOR.PATCH.")
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch)


def is_version_triplet(version: str) -> bool:
    """Return whether a string is a ``MAJOR.MINOR.PATCH`` version."""
    return _VERSION_TRIPLET_PATTERN.match(version) is not None
