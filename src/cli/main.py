"""Notebook CLI entry points.
This module exposes the version-sync, composition, and entry commands.
It maps argparse commands onto the library operations.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from cli.compose_command import (
    add_check_command,
    add_init_command,
    add_render_command,
    run_check_command,
    run_init_command,
    run_render_command,
)
from cli.entry_command import (
    add_entry_types_command,
    add_new_entry_command,
    run_entry_types_command,
    run_new_entry_command,
)
from cli.sync_command import add_sync_version_command, run_sync_version_command
from core.config import NotebookConfig
from core.errors import NotebookError

_COMMAND_HANDLERS = {
    "sync-version": run_sync_version_command,
    "init": run_init_command,
    "check": run_check_command,
    "render": run_render_command,
    "new-entry": run_new_entry_command,
    "entry-types": run_entry_types_command,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="notebook", description="Engineering notebook tooling")
    parser.add_argument("--root", help="Override NOTEBOOK_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_sync_version_command(subparsers)
    add_init_command(subparsers)
    add_check_command(subparsers)
    add_render_command(subparsers)
    add_new_entry_command(subparsers)
    add_entry_types_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the notebook CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = _COMMAND_HANDLERS.get(args.command)
    if handler is None:
        parser.error(f"Unsupported command: {args.command}")
        return 2
    try:
        config = _build_config(args.root)
        return handler(config, args)
    except NotebookError as error:
        print(f"error={error}")
        return 1


def _build_config(root: str | None) -> NotebookConfig:
    """Build runtime config with optional root override.

    Args:
        root: Optional override path.

    Returns:
        Validated runtime config.
    """
    config = NotebookConfig.from_env()
    if root:
        config = replace(config, root=Path(root).expanduser().resolve())
    return config
