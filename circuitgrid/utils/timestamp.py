"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """
    Current local time as a compact, filesystem-safe string.

    Used for naming per-run log directories (e.g., "generate_20251114_123456").

    Returns:
        Timestamp formatted as YYYYMMDD_HHMMSS
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")
