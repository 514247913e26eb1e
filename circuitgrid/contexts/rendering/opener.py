"""
Document Opening and Artifact Cleanup

Opens the compiled PDF with the platform's default viewer and removes the
compiler's intermediate files.
"""

import asyncio
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Union

from dotenv import load_dotenv

from circuitgrid.contexts.rendering.compiler import (
    AUX_EXTENSION,
    LOG_EXTENSION,
    OUTPUT_EXTENSION,
    artifact_path,
)
from circuitgrid.contexts.rendering.exceptions import DocumentOpenError
from circuitgrid.contexts.rendering.logger import _log_debug, _log_info

load_dotenv()
DOCUMENT_VIEWER = os.getenv("DOCUMENT_VIEWER") or None
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"

# Compiler by-products removed after a run; the .tex source is kept
LATEX_ARTIFACTS = [AUX_EXTENSION, LOG_EXTENSION]

Opener = Callable[[Path], Awaitable[None]]


def viewer_command(path: Path, viewer: Optional[str] = None, platform: str = sys.platform) -> List[str]:
    """
    Build the launcher command for opening a file.

    Args:
        path: File to open
        viewer: Explicit viewer command (may include arguments); overrides the platform default
        platform: sys.platform value to choose the default launcher for

    Returns:
        Argument list ending with the file path
    """
    if viewer:
        return shlex.split(viewer) + [str(path)]
    if platform == "darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]


async def open_document(path: Path, viewer: Optional[str] = DOCUMENT_VIEWER) -> None:
    """
    Open a file with the platform's default handler.

    Raises:
        DocumentOpenError: If the file is missing or the launcher fails
    """
    path = Path(path)
    if not path.exists():
        raise DocumentOpenError(path, f"file not found: {path}")

    if sys.platform == "win32" and not viewer:
        try:
            await asyncio.to_thread(os.startfile, str(path.resolve()))
        except OSError as e:
            raise DocumentOpenError(path, str(e)) from e
        return

    try:
        cmd = viewer_command(path, viewer)
    except ValueError as e:
        raise DocumentOpenError(path, f"invalid viewer command: {e}") from e

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise DocumentOpenError(path, f"cannot launch {cmd[0]}: {e}") from e

    returncode = await process.wait()
    if returncode != 0:
        raise DocumentOpenError(path, f"{cmd[0]} exited with status {returncode}")


def remove_artifacts(base_name: Union[str, Path], extensions: List[str] = LATEX_ARTIFACTS) -> List[Path]:
    """
    Best-effort removal of intermediate LaTeX files.

    Missing files and deletion errors are ignored.

    Args:
        base_name: Shared stem of the compiled files
        extensions: Extensions to remove

    Returns:
        Paths that were actually removed
    """
    removed = []
    for ext in extensions:
        artifact = artifact_path(base_name, ext)
        try:
            artifact.unlink()
        except OSError as e:
            _log_debug(f"Skipped removing {artifact}: {e.__class__.__name__}")
            continue
        removed.append(artifact)
    return removed


async def finalize(
    base_name: Union[str, Path],
    opener: Optional[Opener] = None,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
) -> Path:
    """
    Open the compiled PDF, then clean up the .aux and .log by-products.

    Cleanup runs whether or not opening succeeded and never raises.

    Args:
        base_name: Shared stem of the compiled files
        opener: Coroutine function that opens a path (default: open_document)
        keep_artifacts: Skip cleanup (default: from KEEP_LATEX_ARTIFACTS env)

    Returns:
        Path of the opened PDF

    Raises:
        DocumentOpenError: If the PDF cannot be opened
    """
    opener = opener or open_document
    pdf_path = artifact_path(base_name, OUTPUT_EXTENSION)

    try:
        await opener(pdf_path)
        _log_info(f"Opened {pdf_path}")
    finally:
        if keep_artifacts:
            _log_debug("Keeping LaTeX artifacts (KEEP_LATEX_ARTIFACTS=true).")
        else:
            removed = await asyncio.to_thread(remove_artifacts, base_name)
            _log_debug(f"Cleaned up {len(removed)} LaTeX artifacts.")

    return pdf_path
