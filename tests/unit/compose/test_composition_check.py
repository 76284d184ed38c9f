"""Unit tests for pre-render composition checks."""

from __future__ import annotations

from pathlib import Path

from core.types import DependencyReference, NotebookSettings
from compose.composition_check import check_composition
from compose.documents import write_notebook_documents
from tests.fixture_paths import make_package_cache


def _init_project(root: Path, version: str = "1.0.1") -> None:
    settings = NotebookSettings(
        team_name="53E",
        season="High Stakes",
        year="2024-2025",
        package=DependencyReference("local", "notebookinator", version),
    )
    write_notebook_documents(root, settings)


def test_check_composition_passes_for_fresh_project(tmp_path) -> None:
    """A freshly initialized project with its package installed is clean."""
    root = tmp_path / "notebook"
    _init_project(root)
    make_package_cache(tmp_path / "cache", ("1.0.1",))

    report = check_composition(root, tmp_path / "cache")

    assert report.ok


def test_check_composition_reports_uninstalled_version(tmp_path) -> None:
    """A pin to a version missing from the cache should be reported."""
    root = tmp_path / "notebook"
    _init_project(root, version="0.1.0")
    make_package_cache(tmp_path / "cache", ("1.0.1",))

    report = check_composition(root, tmp_path / "cache")

    assert [issue.kind for issue in report.issues] == ["missing-package-version"]


def test_check_composition_reports_missing_section(tmp_path) -> None:
    """Deleting an included section document should be reported."""
    root = tmp_path / "notebook"
    _init_project(root)
    make_package_cache(tmp_path / "cache", ("1.0.1",))
    (root / "appendix.typ").unlink()

    report = check_composition(root, tmp_path / "cache")

    assert [issue.kind for issue in report.issues] == ["missing-include"]
    assert report.issues[0].path == root / "appendix.typ"


def test_check_composition_reports_reordered_sections(tmp_path) -> None:
    """Sections out of order should be reported."""
    root = tmp_path / "notebook"
    _init_project(root)
    make_package_cache(tmp_path / "cache", ("1.0.1",))
    main_path = root / "main.typ"
    text = main_path.read_text(encoding="utf-8")
    main_path.write_text(
        text.replace('#include "/frontmatter.typ"\n', "") + '#include "/frontmatter.typ"\n',
        encoding="utf-8",
    )

    report = check_composition(root, tmp_path / "cache")

    assert [issue.kind for issue in report.issues] == ["section-order"]


def test_check_composition_reports_missing_entry_document(tmp_path) -> None:
    """Entry includes pointing at missing files should be reported."""
    root = tmp_path / "notebook"
    _init_project(root)
    make_package_cache(tmp_path / "cache", ("1.0.1",))
    with (root / "entries" / "entries.typ").open("a", encoding="utf-8") as index_file:
        index_file.write('\n\n#include "/entries/gone/gone.typ"')

    report = check_composition(root, tmp_path / "cache")

    assert [issue.kind for issue in report.issues] == ["missing-include"]


def test_check_composition_empty_root_reports_config_and_main(tmp_path) -> None:
    """An empty directory is missing both config and main documents."""
    report = check_composition(tmp_path, tmp_path / "cache")

    assert [issue.kind for issue in report.issues] == ["missing-config", "missing-main"]
