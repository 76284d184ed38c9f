"""Version-sync command wiring for the notebook CLI.

Invoked without arguments by the container lifecycle hook whenever the
workspace content changes.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from core.config import NotebookConfig
from core.constants import DEFAULT_VERSION_STRATEGY, VERSION_STRATEGIES
from sync.version_sync import sync_package_version


def add_sync_version_command(subparsers: Any) -> None:
    """Register sync-version subcommand."""
    parser = subparsers.add_parser(
        "sync-version",
        help="Pin packages.typ to the template package version installed locally",
    )
    parser.add_argument(
        "--config",
        help="Config file to rewrite, relative to the root (default: <root>/packages.typ)",
    )
    parser.add_argument(
        "--package-dir",
        help="Installed package directory, relative to the root "
        "(default: <cache>/<namespace>/<name>)",
    )
    parser.add_argument(
        "--strategy",
        choices=VERSION_STRATEGIES,
        default=DEFAULT_VERSION_STRATEGY,
        help="Which installed version to pin",
    )


def run_sync_version_command(config: NotebookConfig, args: argparse.Namespace) -> int:
    """Handle sync-version command invocation."""
    config_path = _resolve_under_root(config, args.config) if args.config else config.config_path
    package_dir = (
        _resolve_under_root(config, args.package_dir) if args.package_dir else config.package_dir
    )
    result = sync_package_version(
        config_path=config_path,
        package_dir=package_dir,
        namespace=config.package_namespace,
        name=config.package_name,
        strategy=args.strategy,
    )
    print(f"version={result.selected_version}")
    print(f"replacements={result.replacements}")
    return 0


def _resolve_under_root(config: NotebookConfig, raw_path: str) -> Path:
    """Resolve a path argument against the notebook root."""
    path = Path(raw_path).expanduser()
    if path.is_absolute():
        return path
    return config.root / path
