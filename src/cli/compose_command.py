"""Composition command wiring for the notebook CLI.

This module registers the init, check, and render subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from compose.composition_check import check_composition
from compose.documents import write_notebook_documents
from compose.settings_file import load_notebook_settings
from compose.typst_runner import render_notebook
from core.config import NotebookConfig
from core.constants import DEFAULT_OUTPUT_FILE_NAME, SETTINGS_FILE_NAME
from core.types import CompositionReport


def add_init_command(subparsers: Any) -> None:
    """Register init subcommand."""
    parser = subparsers.add_parser(
        "init",
        help="Write notebook documents from notebook.yaml",
    )
    parser.add_argument("--settings", help="Settings file (default: <root>/notebook.yaml)")
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace documents that already exist",
    )


def add_check_command(subparsers: Any) -> None:
    """Register check subcommand."""
    subparsers.add_parser("check", help="Check documents for load-time render failures")


def add_render_command(subparsers: Any) -> None:
    """Register render subcommand."""
    parser = subparsers.add_parser("render", help="Check and compile the notebook with typst")
    parser.add_argument("--output", help="Output document (default: <root>/main.pdf)")


def run_init_command(config: NotebookConfig, args: argparse.Namespace) -> int:
    """Handle init command invocation."""
    settings_path = (
        Path(args.settings).expanduser() if args.settings else config.root / SETTINGS_FILE_NAME
    )
    settings = load_notebook_settings(settings_path)
    written_paths = write_notebook_documents(config.root, settings, overwrite=args.overwrite)
    for path in written_paths:
        print(path)
    return 0


def run_check_command(config: NotebookConfig, args: argparse.Namespace) -> int:
    """Handle check command invocation."""
    report = check_composition(config.root, config.package_cache)
    _print_report(report)
    return 0 if report.ok else 1


def run_render_command(config: NotebookConfig, args: argparse.Namespace) -> int:
    """Handle render command invocation."""
    report = check_composition(config.root, config.package_cache)
    if not report.ok:
        _print_report(report)
        return 1
    output_path = (
        Path(args.output).expanduser() if args.output else config.root / DEFAULT_OUTPUT_FILE_NAME
    )
    rendered_path = render_notebook(config.root, output_path, config.typst_bin)
    print(f"output_path={rendered_path}")
    return 0


def _print_report(report: CompositionReport) -> None:
    for issue in report.issues:
        print(f"{issue.kind}\t{issue.path}\t{issue.message}")
    print(f"issues={len(report.issues)}")
