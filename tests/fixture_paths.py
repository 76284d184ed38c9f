"""Shared fixture path helpers for tests."""

from __future__ import annotations

from pathlib import Path


def fixture_path(relative_path: str) -> Path:
    """Resolve a path under tests/fixtures.

    Args:
        relative_path: Path under fixtures root.

    Returns:
        Absolute fixture path.
    """
    return Path(__file__).resolve().parent / "fixtures" / relative_path


def make_package_cache(cache_root: Path, versions: tuple[str, ...]) -> Path:
    """Create a Typst package cache with the given notebookinator versions.

    Args:
        cache_root: Directory used as the package cache root.
        versions: Version directory names to create.

    Returns:
        The package directory holding the version directories.
    """
    package_dir = cache_root / "local" / "notebookinator"
    package_dir.mkdir(parents=True, exist_ok=True)
    for version in versions:
        (package_dir / version).mkdir()
    return package_dir
