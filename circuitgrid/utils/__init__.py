"""
Shared utilities for circuitgrid.

Common functionality used across contexts:
- Logger setup with provenance tracking
- Timestamps for log directory naming
"""

from circuitgrid.utils.logger import setup_logger
from circuitgrid.utils.timestamp import now

__all__ = ["now", "setup_logger"]
