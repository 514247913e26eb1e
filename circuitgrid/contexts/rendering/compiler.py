"""
LaTeX Compilation Module

Writes the assembled document to disk and compiles it with an external
LaTeX compiler (pdflatex by default).
"""

import asyncio
import contextlib
import os
import re
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from dotenv import load_dotenv

from circuitgrid.contexts.rendering.exceptions import (
    CompileFailedError,
    CompileTimeoutError,
    ProcessSpawnError,
    SourceWriteError,
)
from circuitgrid.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)
from circuitgrid.contexts.templating.renderer import assemble_document

load_dotenv()


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    """Empty, "0" or "none" disables the timeout."""
    if value is None or value.strip().lower() in ("", "0", "none"):
        return None
    return float(value)


LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
COMPILE_TIMEOUT_S = _parse_timeout(os.getenv("COMPILE_TIMEOUT_S"))

BATCH_MODE_FLAG = "-interaction=nonstopmode"

SOURCE_EXTENSION = ".tex"
OUTPUT_EXTENSION = ".pdf"
AUX_EXTENSION = ".aux"
LOG_EXTENSION = ".log"


@dataclass
class CompilationResult:
    """
    Result of a successful LaTeX compilation.

    Attributes:
        tex_path: Path of the written source file
        pdf_path: Expected path of the compiled PDF (not re-verified)
        returncode: Compiler exit status (always 0 here)
        elapsed_s: Wall-clock time spent in the compiler
        warnings: LaTeX warnings parsed from the compiler log
    """

    tex_path: Path
    pdf_path: Path
    returncode: int = 0
    elapsed_s: float = 0.0
    warnings: List[str] = field(default_factory=list)


def artifact_path(base_name: Union[str, Path], extension: str) -> Path:
    """
    Derive a file path from the shared base name.

    The extension is appended, never substituted, so base names containing
    dots ("sheet.v2") keep their full stem.
    """
    return Path(f"{base_name}{extension}")


def _parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    for match in re.finditer(r"^! (.+)$", log_content, re.MULTILINE):
        errors.append(match.group(1).strip())

    for pattern in [r"LaTeX Warning: (.+)", r"Package \w+ Warning: (.+)"]:
        for match in re.finditer(pattern, log_content, re.MULTILINE):
            warnings.append(match.group(1).strip())

    return errors, warnings


async def _read_log(log_path: Path) -> Tuple[List[str], List[str]]:
    try:
        # pdflatex writes log files in latin-1 encoding
        content = await asyncio.to_thread(log_path.read_text, encoding="latin-1")
    except OSError:
        return [], []
    return _parse_latex_log(content)


def resolve_compiler(compiler: str) -> str:
    """
    Anchor a relative compiler path ("tools/pdflatex") to the current directory.

    The compiler runs from the source's directory, so a relative path would
    otherwise be looked up there. Bare names ("pdflatex") are left for PATH lookup.
    """
    path = Path(compiler)
    if path.is_absolute() or len(path.parts) == 1:
        return compiler
    return str(Path.cwd() / path)


async def write_source(header: str, body: str, tex_path: Path) -> Path:
    """
    Write the assembled document, replacing any existing file.

    Raises:
        SourceWriteError: If the file cannot be written
    """
    source = assemble_document(header, body)
    try:
        await asyncio.to_thread(tex_path.write_text, source, encoding="utf-8")
    except (OSError, ValueError) as e:
        raise SourceWriteError(tex_path, e) from e
    _log_debug(f"Wrote {len(source)} characters to {tex_path}")
    return tex_path


async def run_compiler(
    tex_path: Path,
    compiler: str = LATEX_COMPILER,
    timeout_s: Optional[float] = COMPILE_TIMEOUT_S,
) -> int:
    """
    Run `<compiler> -interaction=nonstopmode <source>` in the source's directory.

    Compiler output is discarded. Outputs land beside the source because the
    compiler runs with the source directory as its working directory.

    Args:
        tex_path: Source file to compile (must exist)
        compiler: Compiler binary name or path
        timeout_s: Kill the compiler after this many seconds (None waits forever)

    Returns:
        Compiler exit status

    Raises:
        ProcessSpawnError: If the compiler cannot be started
        CompileTimeoutError: If the timeout expires
    """
    cmd = [resolve_compiler(compiler), BATCH_MODE_FLAG, tex_path.name]
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(tex_path.resolve().parent),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        raise ProcessSpawnError(compiler, e) from e

    try:
        return await asyncio.wait_for(process.wait(), timeout=timeout_s)
    except asyncio.TimeoutError:
        # The child may exit between the timeout and the kill
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()
        raise CompileTimeoutError(compiler, timeout_s, tex_path) from None


async def compile_source(
    header: str,
    body: str,
    base_name: Union[str, Path],
    compiler: Optional[str] = None,
    timeout_s: Optional[float] = COMPILE_TIMEOUT_S,
) -> CompilationResult:
    """
    Write `<base_name>.tex` and compile it to `<base_name>.pdf`.

    Success is decided by the compiler's exit status alone; the PDF is assumed
    present afterwards and is not checked.

    Args:
        header: Document preamble
        body: Document body (placed inside the document environment)
        base_name: Shared stem for the source, output and by-product files
        compiler: Compiler binary (default: LATEX_COMPILER from environment)
        timeout_s: Optional compiler timeout in seconds

    Returns:
        CompilationResult describing the produced files

    Raises:
        SourceWriteError: If the source cannot be written
        ProcessSpawnError: If the compiler cannot be started
        CompileFailedError: If the compiler exits with a non-zero status
        CompileTimeoutError: If the compiler exceeds timeout_s
    """
    compiler = compiler or LATEX_COMPILER
    tex_path = artifact_path(base_name, SOURCE_EXTENSION)

    await write_source(header, body, tex_path)

    log_compilation_start(compiler, tex_path)
    start_time = time.time()
    returncode = await run_compiler(tex_path, compiler=compiler, timeout_s=timeout_s)
    elapsed = time.time() - start_time

    errors, warnings = await _read_log(artifact_path(base_name, LOG_EXTENSION))
    log_compilation_result(tex_path, returncode, elapsed, errors=errors, warnings=warnings)

    if returncode != 0:
        raise CompileFailedError(compiler, returncode, tex_path=tex_path, errors=errors)

    return CompilationResult(
        tex_path=tex_path,
        pdf_path=artifact_path(base_name, OUTPUT_EXTENSION),
        returncode=returncode,
        elapsed_s=elapsed,
        warnings=warnings,
    )
