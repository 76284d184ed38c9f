"""Theme entry-type metadata.

This module asks the Typst renderer which entry types each theme of the
template package defines, and picks the set matching the theme applied
in the top-level notebook document.
"""

from __future__ import annotations

import json
import re
from typing import Mapping, Sequence

from core.constants import DEFAULT_THEME, ENTRY_TYPES_LABEL
from core.errors import NotebookEntryError
from core.logging_config import get_logger
from core.types import DependencyReference, EntryType
from compose.typst_runner import run_typst

_LOGGER = get_logger(__name__)
_RGB_PATTERN = re.compile(r'^rgb\("#(?P<hex>[0-9A-Fa-f]{6})"\)$')
_NOTEBOOK_SHOW_PATTERN = re.compile(r"#show:\s*notebook\.with\(")
_THEME_ARGUMENT_PATTERN = re.compile(r"\btheme:\s*(?P<expr>[^,\n)]+)")


def render_entry_type_probe(reference: DependencyReference) -> str:
    """Render a Typst document exposing theme entry-type metadata.

    Args:
        reference: Template package reference.

    Returns:
        Document text to query with ``typst query``.
    """
    return (
        f'#import "{reference.spec}": themes\n'
        "#metadata(\n"
        "  dictionary(themes).pairs().map(((name, theme)) => {\n"
        "    let entry-metadata = dictionary(theme.components).pairs().find(\n"
        '      ((key, _value)) => key == "entry-type-metadata"\n'
        "    )\n"
        "    if entry-metadata == none {\n"
        "      return (name, none)\n"
        "    }\n"
        "    return (name, entry-metadata.at(1).pairs())\n"
        "  }),\n"
        f") <{ENTRY_TYPES_LABEL}>\n"
    )


def query_entry_type_metadata(
    reference: DependencyReference,
    typst_bin: str,
) -> dict[str, tuple[EntryType, ...]]:
    """Query entry types of every theme in the template package.

    Args:
        reference: Template package reference.
        typst_bin: Typst executable name or path.

    Returns:
        Theme name to entry types.

    Raises:
        NotebookRenderError: If the typst query fails.
        NotebookEntryError: If the query output is malformed.
    """
    output = run_typst(
        typst_bin,
        ["query", "-", f"<{ENTRY_TYPES_LABEL}>", "--field", "value"],
        input_text=render_entry_type_probe(reference),
    )
    try:
        payload = json.loads(output)
    except json.JSONDecodeError as error:
        raise NotebookEntryError(
            f"Failed to parse entry-type metadata from typst: {error.msg}."
        ) from error
    return parse_entry_type_metadata(payload)


def parse_entry_type_metadata(payload: object) -> dict[str, tuple[EntryType, ...]]:
    """Parse ``typst query`` output into entry types per theme.

    Args:
        payload: Decoded JSON; a one-element list holding
            ``[theme_name, [[entry_name, color], ...] | null]`` pairs.

    Returns:
        Theme name to entry types, themes without metadata omitted.

    Raises:
        NotebookEntryError: If the payload shape is unexpected.
    """
    if not isinstance(payload, list) or len(payload) != 1:
        raise NotebookEntryError(
            "Invalid entry-type metadata: expected exactly one queried metadata element."
        )
    theme_rows = _expect_list(payload[0], "theme list")
    metadata = {}
    for theme_row in theme_rows:
        theme_pair = _expect_list(theme_row, "theme entry")
        if len(theme_pair) != 2 or not isinstance(theme_pair[0], str):
            raise NotebookEntryError(
                "Invalid entry-type metadata: theme entries must be [name, types] pairs."
            )
        theme_name, entry_rows = theme_pair
        if entry_rows is None:
            continue
        metadata[theme_name] = tuple(
            _parse_entry_type(entry_row) for entry_row in _expect_list(entry_rows, "entry types")
        )
    return metadata


def parse_rgb_color(text: str) -> tuple[int, int, int]:
    """Parse a Typst ``rgb("#rrggbb")`` expression.

    Args:
        text: Colour expression.

    Returns:
        Red, green and blue components.

    Raises:
        NotebookEntryError: If text is not a six-digit rgb expression.
    """
    match = _RGB_PATTERN.match(text.strip())
    if match is None:
        raise NotebookEntryError(
            f"Invalid entry-type color '{text}'. Expected rgb(\"#rrggbb\")."
        )
    hex_value = match.group("hex")
    return int(hex_value[0:2], 16), int(hex_value[2:4], 16), int(hex_value[4:6], 16)


def detect_theme(main_text: str) -> str | None:
    """Return the theme expression passed to the notebook show rule.

    Args:
        main_text: Top-level notebook document text.

    Returns:
        Theme argument expression, or ``None`` when absent.
    """
    show_match = _NOTEBOOK_SHOW_PATTERN.search(main_text)
    if show_match is None:
        return None
    theme_match = _THEME_ARGUMENT_PATTERN.search(main_text, show_match.end())
    if theme_match is None:
        return None
    return theme_match.group("expr").strip()


def select_entry_types(
    metadata: Mapping[str, tuple[EntryType, ...]],
    theme_expression: str | None,
) -> tuple[str, tuple[EntryType, ...]]:
    """Pick the entry types of the theme used by the notebook.

    Args:
        metadata: Theme name to entry types.
        theme_expression: Theme argument from the notebook show rule.

    Returns:
        Selected theme name and its entry types.

    Raises:
        NotebookEntryError: If no theme defines entry types.
    """
    if theme_expression is not None:
        for theme_name, entry_types in metadata.items():
            if theme_name in theme_expression:
                return theme_name, entry_types
    if not metadata:
        raise NotebookEntryError(
            "No theme in the template package defines entry types. "
            "Check the installed package version."
        )
    fallback_theme = DEFAULT_THEME if DEFAULT_THEME in metadata else next(iter(metadata))
    _LOGGER.warning(
        "entry_theme_not_found",
        theme_expression=theme_expression,
        fallback_theme=fallback_theme,
    )
    return fallback_theme, metadata[fallback_theme]


def _parse_entry_type(entry_row: object) -> EntryType:
    entry_pair = _expect_list(entry_row, "entry type")
    if len(entry_pair) != 2 or not isinstance(entry_pair[0], str):
        raise NotebookEntryError(
            "Invalid entry-type metadata: entry types must be [name, color] pairs."
        )
    entry_name, raw_color = entry_pair
    if isinstance(raw_color, Mapping):
        raw_color = raw_color.get("color")
    if not isinstance(raw_color, str):
        raise NotebookEntryError(
            f"Invalid entry-type metadata: entry type '{entry_name}' has no color string."
        )
    return EntryType(name=entry_name, color=parse_rgb_color(raw_color))


def _expect_list(value: object, context: str) -> Sequence[object]:
    if isinstance(value, list):
        return value
    raise NotebookEntryError(
        f"Invalid entry-type metadata {context}: expected list, got {type(value).__name__}."
    )
