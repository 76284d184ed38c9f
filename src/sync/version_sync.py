"""Config file version synchronization.

This module rewrites the template package version pinned in the
notebook config file to the version found in the local package cache.
It runs once at environment setup, before any render.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import (
    DEFAULT_PACKAGE_NAME,
    DEFAULT_PACKAGE_NAMESPACE,
    DEFAULT_VERSION_STRATEGY,
)
from core.errors import NotebookSyncError
from core.logging_config import get_logger
from core.types import VersionSyncResult
from sync.dependency_reference import find_dependency_references, replace_dependency_version
from sync.package_cache import is_version_triplet, list_installed_versions, select_version

_LOGGER = get_logger(__name__)


def sync_package_version(
    config_path: Path,
    package_dir: Path,
    namespace: str = DEFAULT_PACKAGE_NAMESPACE,
    name: str = DEFAULT_PACKAGE_NAME,
    strategy: str = DEFAULT_VERSION_STRATEGY,
) -> VersionSyncResult:
    """Pin the config file to an installed template package version.

    Args:
        config_path: Config file holding the package reference.
        package_dir: Cache directory with one subdirectory per version.
        namespace: Package namespace.
        name: Package name.
        strategy: Version selection strategy, see ``select_version``.

    Returns:
        Sync outcome.

    Raises:
        NotebookSyncError: If the config file or package directory is
            missing, no version is installed, or the selected entry is
            not a version triplet.
    """
    if not config_path.is_file():
        raise NotebookSyncError(
            f"Config file not found at {config_path}. Run 'notebook init' to create it."
        )
    versions = list_installed_versions(package_dir)
    selected_version = select_version(versions, strategy)
    if not is_version_triplet(selected_version):
        raise NotebookSyncError(
            f"Installed entry '{selected_version}' in {package_dir} is not a "
            "MAJOR.MINOR.PATCH version. Remove it from the package cache or use "
            "--strategy highest."
        )
    original_text = config_path.read_text(encoding="utf-8")
    previous_versions = tuple(
        reference.version
        for reference in find_dependency_references(original_text, namespace, name)
    )
    updated_text, replacements = replace_dependency_version(
        original_text, namespace, name, selected_version
    )
    changed = updated_text != original_text
    if changed:
        config_path.write_text(updated_text, encoding="utf-8")
    if replacements == 0:
        _LOGGER.warning(
            "package_reference_not_found",
            config_path=str(config_path),
            package=f"{namespace}/{name}",
        )
    _LOGGER.info(
        "package_version_synced",
        config_path=str(config_path),
        selected_version=selected_version,
        previous_versions=list(previous_versions),
        replacements=replacements,
        changed=changed,
    )
    return VersionSyncResult(
        config_path=config_path,
        selected_version=selected_version,
        previous_versions=previous_versions,
        replacements=replacements,
        changed=changed,
    )
