"""Pre-render composition checks.

This module reports the load-time failures the renderer would hit:
a missing or unresolvable package pin, a top-level document that does
not include the three sections in order, and missing include targets.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import (
    ENTRIES_DOCUMENT,
    MAIN_FILE_NAME,
    PACKAGES_FILE_NAME,
    SECTION_DOCUMENTS,
)
from core.errors import NotebookSyncError
from core.logging_config import get_logger
from core.types import CompositionIssue, CompositionReport
from compose.documents import parse_includes, resolve_include
from sync.dependency_reference import read_package_reference

_LOGGER = get_logger(__name__)


def check_composition(root: Path, package_cache: Path) -> CompositionReport:
    """Check a notebook project for load-time failures.

    Args:
        root: Notebook project directory.
        package_cache: Typst package cache root.

    Returns:
        Report listing every issue found.
    """
    issues = [*_check_package_pin(root, package_cache), *_check_main_document(root)]
    report = CompositionReport(root=root, issues=tuple(issues))
    _LOGGER.info("composition_checked", root=str(root), issue_count=len(report.issues))
    return report


def _check_package_pin(root: Path, package_cache: Path) -> list[CompositionIssue]:
    config_path = root / PACKAGES_FILE_NAME
    if not config_path.exists():
        return [
            CompositionIssue(
                kind="missing-config",
                path=config_path,
                message="Config file is missing. Run 'notebook init'.",
            )
        ]
    try:
        reference = read_package_reference(config_path)
    except NotebookSyncError as error:
        return [
            CompositionIssue(
                kind="missing-package-reference",
                path=config_path,
                message=str(error),
            )
        ]
    version_dir = package_cache / reference.namespace / reference.name / reference.version
    if version_dir.is_dir():
        return []
    return [
        CompositionIssue(
            kind="missing-package-version",
            path=version_dir,
            message=(
                f"Package {reference.spec} is not installed. "
                "Run 'notebook sync-version' or install that version."
            ),
        )
    ]


def _check_main_document(root: Path) -> list[CompositionIssue]:
    main_path = root / MAIN_FILE_NAME
    if not main_path.exists():
        return [
            CompositionIssue(
                kind="missing-main",
                path=main_path,
                message="Top-level notebook document is missing. Run 'notebook init'.",
            )
        ]
    issues = []
    includes = parse_includes(main_path.read_text(encoding="utf-8"))
    if includes != SECTION_DOCUMENTS:
        issues.append(
            CompositionIssue(
                kind="section-order",
                path=main_path,
                message=(
                    f"Expected includes {', '.join(SECTION_DOCUMENTS)} in that order, "
                    f"found {', '.join(includes) or 'none'}."
                ),
            )
        )
    issues.extend(_missing_includes(root, main_path, includes))
    entries_path = resolve_include(root, main_path, ENTRIES_DOCUMENT)
    if entries_path.exists():
        entry_includes = parse_includes(entries_path.read_text(encoding="utf-8"))
        issues.extend(_missing_includes(root, entries_path, entry_includes))
    return issues


def _missing_includes(
    root: Path,
    including_file: Path,
    includes: tuple[str, ...],
) -> list[CompositionIssue]:
    issues = []
    for target in includes:
        target_path = resolve_include(root, including_file, target)
        if not target_path.is_file():
            issues.append(
                CompositionIssue(
                    kind="missing-include",
                    path=target_path,
                    message=f"Included document '{target}' from {including_file.name} is missing.",
                )
            )
    return issues
