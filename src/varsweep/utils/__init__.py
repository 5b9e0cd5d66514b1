"""Utility functions for varsweep.

This module provides utility functions including:

- Logging setup and configuration
- Run statistics tracking
"""

from varsweep.utils.logging import (
    RunLogger,
    RunStats,
    configure_logging,
)

__all__ = [
    "RunLogger",
    "RunStats",
    "configure_logging",
]
