"""
Generation context logger.

Provides logging interface for generation context with automatic [generate] prefix.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from circuitgrid.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[generate]"


def setup_generation_logger(log_dir: Path, console_level: Optional[str] = None) -> Path:
    """
    Setup logger for a generation session.

    Args:
        log_dir: Directory for this session's log file
        console_level: Minimum level shown on the console (default: CONSOLE_LOG_LEVEL env)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="generate",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": os.getenv("LATEX_COMPILER", "pdflatex")},
        console_level=console_level,
    )


def _log_info(message: str) -> None:
    """Log info message with [generate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [generate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [generate] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [generate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
