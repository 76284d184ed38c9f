"""Entry document creation.

This module writes one Typst document per notebook entry and appends
its include line to the entries index document, which the top-level
notebook document includes between front matter and appendix.
"""

from __future__ import annotations

import subprocess
from datetime import date
from pathlib import Path

from core.constants import (
    ENTRIES_DIR_NAME,
    ENTRIES_INDEX_FILE_NAME,
    ENTRY_SECTIONS,
    PACKAGES_FILE_NAME,
)
from core.errors import NotebookEntryError
from core.logging_config import get_logger
from core.types import EntryRequest
from compose.documents import typst_string

_LOGGER = get_logger(__name__)
_UNSAFE_SLUG_CHARACTERS = ('"', "\\")


def entry_slug(title: str) -> str:
    """Build the entry directory path below ``entries/`` from a title.

    Args:
        title: Entry title; ``/`` separators nest directories.

    Returns:
        Lowercase slug with spaces replaced by underscores.

    Raises:
        NotebookEntryError: If the slug is empty, escapes the entries directory,
            or holds characters that cannot appear in a Typst include path.
    """
    slug = title.strip().lower().replace(" ", "_").rstrip("/")
    if any(character in slug for character in _UNSAFE_SLUG_CHARACTERS):
        raise NotebookEntryError(
            f"Invalid entry title '{title}'. Remove quotes and backslashes from the title."
        )
    parts = slug.split("/")
    if not slug or any(part in ("", ".", "..") for part in parts):
        raise NotebookEntryError(
            f"Invalid entry title '{title}'. Use non-empty path components without '.' or '..'."
        )
    return slug


def entry_display_title(title: str) -> str:
    """Return the title shown in the notebook, the last ``/`` component."""
    return title.split("/")[-1].strip()


def render_entry_document(request: EntryRequest) -> str:
    """Render the Typst content of a new entry.

    Args:
        request: Entry fields.

    Returns:
        Entry document content.
    """
    entry_date = request.entry_date
    return (
        f'#import "/{PACKAGES_FILE_NAME}": *\n'
        "#import components: *\n"
        "\n"
        "#show: create-entry.with(\n"
        f"  section: {typst_string(request.section)},\n"
        f"  title: {typst_string(entry_display_title(request.title))},\n"
        f"  type: {typst_string(request.entry_type)},\n"
        f"  date: datetime(year: {entry_date.year}, month: {entry_date.month}, "
        f"day: {entry_date.day}),\n"
        f"  author: {typst_string(request.author)},\n"
        f"  witness: {typst_string(request.witness)},\n"
        ")\n"
    )


def create_entry(root: Path, request: EntryRequest) -> Path:
    """Create an entry document and register it in the entries index.

    Args:
        root: Notebook project directory.
        request: Entry fields.

    Returns:
        Path of the new entry document.

    Raises:
        NotebookEntryError: If input is invalid, the entry already exists,
            or the entries index is missing.
    """
    _validate_request(request)
    index_path = root / ENTRIES_DIR_NAME / ENTRIES_INDEX_FILE_NAME
    if not index_path.is_file():
        raise NotebookEntryError(
            f"Entries index not found at {index_path}. Run 'notebook init' first."
        )
    slug = entry_slug(request.title)
    entry_dir = root / ENTRIES_DIR_NAME / slug
    entry_path = entry_dir / f"{slug.split('/')[-1]}.typ"
    try:
        entry_dir.mkdir(parents=True, exist_ok=True)
        with entry_path.open("x", encoding="utf-8") as entry_file:
            entry_file.write(render_entry_document(request))
    except FileExistsError as error:
        raise NotebookEntryError(
            f"Entry document already exists at {entry_path}. Choose a different title."
        ) from error
    except OSError as error:
        raise NotebookEntryError(
            f"Failed to create entry document {entry_path}: {error}."
        ) from error
    include_target = "/" + entry_path.relative_to(root).as_posix()
    try:
        with index_path.open("a", encoding="utf-8") as index_file:
            index_file.write(f'\n\n#include "{include_target}"')
    except OSError as error:
        entry_path.unlink(missing_ok=True)
        raise NotebookEntryError(
            f"Failed to register entry in {index_path}: {error}."
        ) from error
    _LOGGER.info(
        "entry_created",
        entry_path=str(entry_path),
        section=request.section,
        entry_type=request.entry_type,
    )
    return entry_path


def parse_entry_date(raw_value: str | None, today: date) -> date:
    """Parse an entry date, falling back to today.

    Args:
        raw_value: ISO ``YYYY-MM-DD`` date text, or ``None``.
        today: Fallback date.

    Returns:
        Parsed date, or ``today`` when missing or unparseable.
    """
    if raw_value is None or not raw_value.strip():
        return today
    try:
        return date.fromisoformat(raw_value.strip())
    except ValueError:
        _LOGGER.warning("entry_date_unparseable", raw_value=raw_value, fallback=today.isoformat())
        return today


def default_author() -> str:
    """Return the git user name, or an empty string when unavailable."""
    try:
        result = subprocess.run(
            ["git", "config", "--get", "user.name"],
            capture_output=True,
            check=False,
            text=True,
        )
    except OSError:
        return ""
    return result.stdout.strip()


def _validate_request(request: EntryRequest) -> None:
    if request.section not in ENTRY_SECTIONS:
        raise NotebookEntryError(
            f"Unsupported entry section '{request.section}'. "
            f"Use one of: {', '.join(ENTRY_SECTIONS)}."
        )
    if not entry_display_title(request.title):
        raise NotebookEntryError("Entry title must be specified.")
    if not request.entry_type.strip():
        raise NotebookEntryError("Entry type must be specified.")
