"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
