"""Typst command-line invocation.

This module wraps calls to the external ``typst`` executable and turns
its failures into notebook errors carrying the captured output.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Sequence

from core.constants import MAIN_FILE_NAME
from core.errors import NotebookRenderError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def run_typst(
    typst_bin: str,
    arguments: Sequence[str],
    input_text: str | None = None,
) -> str:
    """Run one typst command and return its standard output.

    Args:
        typst_bin: Typst executable name or path.
        arguments: Command arguments after the executable.
        input_text: Optional text fed to standard input.

    Returns:
        Decoded standard output.

    Raises:
        NotebookRenderError: If typst is missing or exits non-zero.
    """
    command = [typst_bin, *arguments]
    try:
        result = subprocess.run(
            command,
            input=input_text,
            capture_output=True,
            check=True,
            text=True,
        )
    except FileNotFoundError as error:
        raise NotebookRenderError(
            f"Typst executable '{typst_bin}' not found. "
            "Install typst or set NOTEBOOK_TYPST_BIN to its path."
        ) from error
    except subprocess.CalledProcessError as error:
        message = f"Command '{' '.join(command)}' failed with exit code {error.returncode}."
        if error.stderr:
            message += f"\nerrors:\n{error.stderr.strip()}"
        raise NotebookRenderError(message) from None
    return result.stdout


def render_notebook(root: Path, output_path: Path, typst_bin: str) -> Path:
    """Compile the top-level notebook document to a PDF.

    Args:
        root: Notebook project directory.
        output_path: Destination document path.
        typst_bin: Typst executable name or path.

    Returns:
        Path of the rendered document.

    Raises:
        NotebookRenderError: If the renderer fails.
    """
    main_path = root / MAIN_FILE_NAME
    run_typst(
        typst_bin,
        ["compile", "--root", str(root), str(main_path), str(output_path)],
    )
    _LOGGER.info("notebook_rendered", main_path=str(main_path), output_path=str(output_path))
    return output_path
