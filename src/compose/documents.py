"""Typst document rendering for notebook projects.

This module produces the config file, the top-level notebook document,
and the section documents it includes. The top-level document applies
the template transform and includes front matter, entries and appendix
in that fixed order.
"""

from __future__ import annotations

import re
from pathlib import Path

from core.constants import (
    APPENDIX_DOCUMENT,
    ENTRIES_DOCUMENT,
    FRONTMATTER_DOCUMENT,
    MAIN_FILE_NAME,
    PACKAGES_FILE_NAME,
    SECTION_DOCUMENTS,
)
from core.errors import NotebookCompositionError
from core.logging_config import get_logger
from core.types import DependencyReference, NotebookSettings

_LOGGER = get_logger(__name__)
_INCLUDE_PATTERN = re.compile(r'^[ \t]*#include[ \t]+"(?P<target>[^"]+)"', re.MULTILINE)


def typst_string(value: str) -> str:
    """Quote a value as a Typst string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_packages_document(reference: DependencyReference, theme: str) -> str:
    """Render the config file that pins the template package.

    Args:
        reference: Template package reference.
        theme: Theme whose components are re-exported.

    Returns:
        ``packages.typ`` content.
    """
    return (
        f'#import "{reference.spec}": *\n'
        f"#import themes.{theme}: {theme}-theme, components\n"
    )


def render_main_document(settings: NotebookSettings) -> str:
    """Render the top-level notebook document.

    Args:
        settings: Template transform options.

    Returns:
        ``main.typ`` content.
    """
    includes = "".join(f'#include "{document}"\n' for document in SECTION_DOCUMENTS)
    return (
        f'#import "/{PACKAGES_FILE_NAME}": *\n'
        "\n"
        "#show: notebook.with(\n"
        f"  theme: {settings.theme}-theme,\n"
        f"  team-name: {typst_string(settings.team_name)},\n"
        f"  season: {typst_string(settings.season)},\n"
        f"  year: {typst_string(settings.year)},\n"
        ")\n"
        "\n"
        f"{includes}"
    )


def render_section_document(section_document: str) -> str:
    """Render the starting content of one included section document.

    Args:
        section_document: One of the section include paths.

    Returns:
        Document content.

    Raises:
        NotebookCompositionError: If the path is not a section document.
    """
    header = f'#import "/{PACKAGES_FILE_NAME}": *\n#import components: *\n'
    if section_document == FRONTMATTER_DOCUMENT:
        return (
            f"{header}\n"
            '#create-entry(section: "frontmatter", title: "Table of Contents")[\n'
            "  #toc()\n"
            "]\n"
        )
    if section_document == ENTRIES_DOCUMENT:
        return "// Entries are appended below by `notebook new-entry`.\n"
    if section_document == APPENDIX_DOCUMENT:
        return (
            f"{header}\n"
            '#create-entry(section: "appendix", title: "Glossary")[\n'
            "  #glossary()\n"
            "]\n"
        )
    raise NotebookCompositionError(
        f"Unknown section document '{section_document}'. "
        f"Use one of: {', '.join(SECTION_DOCUMENTS)}."
    )


def write_notebook_documents(
    root: Path,
    settings: NotebookSettings,
    overwrite: bool = False,
) -> tuple[Path, ...]:
    """Write the notebook project documents under a root directory.

    Args:
        root: Notebook project directory.
        settings: Template transform options.
        overwrite: Replace documents that already exist.

    Returns:
        Paths that were written.

    Raises:
        NotebookCompositionError: If a document cannot be written.
    """
    documents = {
        PACKAGES_FILE_NAME: render_packages_document(settings.package, settings.theme),
        MAIN_FILE_NAME: render_main_document(settings),
    }
    for section_document in SECTION_DOCUMENTS:
        documents[section_document.lstrip("/")] = render_section_document(section_document)
    written_paths = []
    for relative_path, content in documents.items():
        target_path = root / relative_path
        if target_path.exists() and not overwrite:
            _LOGGER.info("notebook_document_kept", path=str(target_path))
            continue
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(content, encoding="utf-8")
        except OSError as error:
            raise NotebookCompositionError(
                f"Failed to write notebook document {target_path}: {error}."
            ) from error
        written_paths.append(target_path)
    _LOGGER.info(
        "notebook_documents_written",
        root=str(root),
        written=[str(path) for path in written_paths],
    )
    return tuple(written_paths)


def parse_includes(text: str) -> tuple[str, ...]:
    """Return include targets of a Typst document in order.

    Args:
        text: Document text.

    Returns:
        Include targets; commented-out includes are skipped.
    """
    return tuple(match.group("target") for match in _INCLUDE_PATTERN.finditer(text))


def resolve_include(root: Path, including_file: Path, target: str) -> Path:
    """Resolve an include target the way the Typst renderer does.

    Args:
        root: Project root; absolute targets are relative to it.
        including_file: Document that contains the include.
        target: Include target text.

    Returns:
        Filesystem path of the included document.
    """
    if target.startswith("/"):
        return root / target.lstrip("/")
    return including_file.parent / target
