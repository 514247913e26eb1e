"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_compilation_start(compiler: str, tex_path: Path) -> None:
    """Log start of compilation with context."""
    _log_info(f"Compiling {tex_path.name} with {compiler}")
    _log_debug(f"  Source: {tex_path}")
    _log_debug(f"  Working directory: {tex_path.parent}")


def log_compilation_result(
    tex_path: Path,
    returncode: int,
    elapsed_time: float,
    errors: list = None,
    warnings: list = None,
    error_limit: int = 5,
) -> None:
    """
    Log compilation result with diagnostics parsed from the compiler log.

    Args:
        tex_path: Source that was compiled
        returncode: Compiler exit status
        elapsed_time: Time taken to compile
        errors: LaTeX errors parsed from the .log file
        warnings: LaTeX warnings parsed from the .log file
        error_limit: Maximum number of errors to list individually
    """
    errors = errors or []
    warnings = warnings or []

    if returncode == 0:
        _log_success(f"{tex_path.stem}: compiled ({elapsed_time:.2f}s)")
    else:
        _log_error(f"{tex_path.stem}: compiler exited with status {returncode} ({elapsed_time:.2f}s)")
        for i, err in enumerate(errors[:error_limit], 1):
            _log_debug(f"  Error {i}: {err}")
        if len(errors) > error_limit:
            _log_debug(f"  ... and {len(errors) - error_limit} more errors")

    if warnings:
        _log_debug(f"  {len(warnings)} warnings detected")
