"""Entry command wiring for the notebook CLI.

This module registers the new-entry and entry-types subcommands.
"""

from __future__ import annotations

import argparse
from datetime import date
from typing import Any

from core.config import NotebookConfig
from core.constants import DEFAULT_ENTRY_SECTION, ENTRY_SECTIONS, MAIN_FILE_NAME
from core.errors import NotebookEntryError
from core.types import EntryRequest
from entries.entry_scaffold import create_entry, default_author, parse_entry_date
from entries.entry_types import detect_theme, query_entry_type_metadata, select_entry_types
from sync.dependency_reference import read_package_reference


def add_new_entry_command(subparsers: Any) -> None:
    """Register new-entry subcommand."""
    parser = subparsers.add_parser("new-entry", help="Create a notebook entry document")
    parser.add_argument("--title", required=True, help="Entry title; '/' nests directories")
    parser.add_argument("--type", dest="entry_type", required=True, help="Theme entry type")
    parser.add_argument(
        "--section",
        choices=ENTRY_SECTIONS,
        default=DEFAULT_ENTRY_SECTION,
        help="Notebook section",
    )
    parser.add_argument("--date", help="Entry date as YYYY-MM-DD (default: today)")
    parser.add_argument("--author", help="Entry author (default: git user.name)")
    parser.add_argument("--witness", default="", help="Optional witness name")


def add_entry_types_command(subparsers: Any) -> None:
    """Register entry-types subcommand."""
    subparsers.add_parser(
        "entry-types",
        help="List entry types of the theme used in main.typ",
    )


def run_new_entry_command(config: NotebookConfig, args: argparse.Namespace) -> int:
    """Handle new-entry command invocation."""
    author = args.author if args.author is not None else default_author()
    if not author:
        raise NotebookEntryError(
            "Entry author must be specified. Pass --author or set git user.name."
        )
    request = EntryRequest(
        title=args.title,
        entry_type=args.entry_type,
        entry_date=parse_entry_date(args.date, date.today()),
        author=author,
        witness=args.witness,
        section=args.section,
    )
    entry_path = create_entry(config.root, request)
    print(entry_path)
    return 0


def run_entry_types_command(config: NotebookConfig, args: argparse.Namespace) -> int:
    """Handle entry-types command invocation."""
    reference = read_package_reference(config.config_path)
    metadata = query_entry_type_metadata(reference, config.typst_bin)
    main_path = config.root / MAIN_FILE_NAME
    theme_expression = (
        detect_theme(main_path.read_text(encoding="utf-8")) if main_path.exists() else None
    )
    theme_name, entry_types = select_entry_types(metadata, theme_expression)
    print(f"theme={theme_name}")
    for entry_type in entry_types:
        red, green, blue = entry_type.color
        print(f"{entry_type.name}\t#{red:02x}{green:02x}{blue:02x}")
    return 0
