"""Dependency reference parsing for Typst documents.

This module finds and rewrites ``@namespace/name:X.Y.Z`` package
specifiers inside document text.
"""

from __future__ import annotations

import re
from pathlib import Path

from core.errors import NotebookSyncError
from core.types import DependencyReference

_ANY_REFERENCE_PATTERN = re.compile(
    r"@(?P<namespace>[A-Za-z0-9_-]+)/(?P<name>[A-Za-z0-9_-]+):(?P<version>\d+\.\d+\.\d+)"
)


def find_dependency_references(
    text: str,
    namespace: str,
    name: str,
) -> tuple[DependencyReference, ...]:
    """Find references to one package in document text.

    Args:
        text: Document text.
        namespace: Package namespace.
        name: Package name.

    Returns:
        References in order of appearance.
    """
    return tuple(
        DependencyReference(namespace=namespace, name=name, version=match.group("version"))
        for match in _package_pattern(namespace, name).finditer(text)
    )


def replace_dependency_version(
    text: str,
    namespace: str,
    name: str,
    version: str,
) -> tuple[str, int]:
    """Rewrite the version of every reference to one package.

    Args:
        text: Document text.
        namespace: Package namespace.
        name: Package name.
        version: Replacement version string.

    Returns:
        Rewritten text and number of replaced references.
    """
    pattern = _package_pattern(namespace, name)
    replacement = f"{namespace}/{name}:{version}"
    return pattern.subn(lambda _match: replacement, text)


def read_package_reference(config_path: Path) -> DependencyReference:
    """Read the first package reference pinned in a config file.

    Args:
        config_path: Config file, usually ``packages.typ``.

    Returns:
        First reference found.

    Raises:
        NotebookSyncError: If the file is missing or pins no package.
    """
    if not config_path.exists():
        raise NotebookSyncError(
            f"Config file not found at {config_path}. Run 'notebook init' to create it."
        )
    match = _ANY_REFERENCE_PATTERN.search(config_path.read_text(encoding="utf-8"))
    if match is None:
        raise NotebookSyncError(
            f"No '@namespace/name:X.Y.Z' package reference found in {config_path}."
        )
    return DependencyReference(
        namespace=match.group("namespace"),
        name=match.group("name"),
        version=match.group("version"),
    )


def parse_dependency_reference(raw_value: str) -> DependencyReference:
    """Parse a standalone ``@namespace/name:X.Y.Z`` specifier.

    Args:
        raw_value: Specifier text, leading ``@`` optional.

    Returns:
        Parsed reference.

    Raises:
        NotebookSyncError: If the specifier is malformed.
    """
    value = raw_value.strip()
    if not value.startswith("@"):
        value = f"@{value}"
    match = _ANY_REFERENCE_PATTERN.fullmatch(value)
    if match is None:
        raise NotebookSyncError(
            f"Invalid package reference '{raw_value}'. Expected '@namespace/name:X.Y.Z'."
        )
    return DependencyReference(
        namespace=match.group("namespace"),
        name=match.group("name"),
        version=match.group("version"),
    )


def _package_pattern(namespace: str, name: str) -> re.Pattern[str]:
    return re.compile(
        rf"(?<![A-Za-z0-9_-]){re.escape(namespace)}/{re.escape(name)}"
        r":(?P<version>[0-9]+\.[0-9]+\.[0-9]+)"
    )
