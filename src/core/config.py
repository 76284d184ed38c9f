"""Runtime configuration model for notebook tooling.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
import re
from pathlib import Path

from core.constants import (
    DEFAULT_NOTEBOOK_ROOT,
    DEFAULT_PACKAGE_CACHE,
    DEFAULT_PACKAGE_NAME,
    DEFAULT_PACKAGE_NAMESPACE,
    DEFAULT_TYPST_BIN,
    PACKAGES_FILE_NAME,
)
from core.errors import NotebookConfigError

_PACKAGE_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class NotebookConfig:
    """Validated runtime configuration.

    Attributes:
        root: Notebook project directory holding the Typst documents.
        package_cache: Typst package cache, one subdirectory per namespace.
        typst_bin: Typst executable name or path.
        package_namespace: Namespace of the template package.
        package_name: Name of the template package.
    """

    root: Path
    package_cache: Path
    typst_bin: str
    package_namespace: str
    package_name: str

    @classmethod
    def from_env(cls) -> "NotebookConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            NotebookConfigError: If environment values are invalid.
        """
        root_value = os.getenv("NOTEBOOK_ROOT", str(DEFAULT_NOTEBOOK_ROOT))
        cache_value = os.getenv("NOTEBOOK_PACKAGE_CACHE", str(DEFAULT_PACKAGE_CACHE))
        typst_bin = os.getenv("NOTEBOOK_TYPST_BIN", DEFAULT_TYPST_BIN).strip()
        if not typst_bin:
            raise NotebookConfigError(
                "Invalid NOTEBOOK_TYPST_BIN value: expected a command name, got ''. "
                "Unset it or point it at the typst executable."
            )
        namespace = _parse_identifier(
            "NOTEBOOK_PACKAGE_NAMESPACE",
            os.getenv("NOTEBOOK_PACKAGE_NAMESPACE", DEFAULT_PACKAGE_NAMESPACE),
        )
        name = _parse_identifier(
            "NOTEBOOK_PACKAGE_NAME",
            os.getenv("NOTEBOOK_PACKAGE_NAME", DEFAULT_PACKAGE_NAME),
        )
        return cls(
            root=Path(root_value).expanduser().resolve(),
            package_cache=Path(cache_value).expanduser().resolve(),
            typst_bin=typst_bin,
            package_namespace=namespace,
            package_name=name,
        )

    @property
    def package_dir(self) -> Path:
        """Directory holding one subdirectory per installed package version."""
        return self.package_cache / self.package_namespace / self.package_name

    @property
    def config_path(self) -> Path:
        """Path of the config file pinning the template package version."""
        return self.root / PACKAGES_FILE_NAME


def _parse_identifier(variable: str, raw_value: str) -> str:
    """Validate a package namespace or name environment value.

    Args:
        variable: Environment variable name, used in messages.
        raw_value: Raw string from environment.

    Returns:
        The stripped identifier.

    Raises:
        NotebookConfigError: If value is not a package identifier.
    """
    value = raw_value.strip()
    if not _PACKAGE_IDENTIFIER_PATTERN.match(value):
        raise NotebookConfigError(
            f"Invalid {variable} value: expected letters, digits, '-' or '_', "
            f"got '{raw_value}'. Set {variable} to a Typst package identifier."
        )
    return value
