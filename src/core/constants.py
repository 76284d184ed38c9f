"""Core constants used across notebook modules.

This module centralizes file names, defaults and vocabulary.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_NOTEBOOK_ROOT = Path(".")
DEFAULT_PACKAGE_CACHE = Path("~/.local/share/typst/packages")
DEFAULT_TYPST_BIN = "typst"
DEFAULT_PACKAGE_NAMESPACE = "local"
DEFAULT_PACKAGE_NAME = "notebookinator"
DEFAULT_PACKAGE_VERSION = "1.0.1"
PACKAGES_FILE_NAME = "packages.typ"
MAIN_FILE_NAME = "main.typ"
SETTINGS_FILE_NAME = "notebook.yaml"
DEFAULT_OUTPUT_FILE_NAME = "main.pdf"
ENTRIES_DIR_NAME = "entries"
ENTRIES_INDEX_FILE_NAME = "entries.typ"
FRONTMATTER_DOCUMENT = "/frontmatter.typ"
ENTRIES_DOCUMENT = "/entries/entries.typ"
APPENDIX_DOCUMENT = "/appendix.typ"
SECTION_DOCUMENTS = (FRONTMATTER_DOCUMENT, ENTRIES_DOCUMENT, APPENDIX_DOCUMENT)
SUPPORTED_THEMES = ("radial", "default", "linear")
DEFAULT_THEME = "radial"
ENTRY_SECTIONS = ("body", "frontmatter", "appendix")
DEFAULT_ENTRY_SECTION = "body"
VERSION_STRATEGIES = ("first", "highest")
DEFAULT_VERSION_STRATEGY = "first"
ENTRY_TYPES_LABEL = "entry-types"
