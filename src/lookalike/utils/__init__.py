"""Utility functions for lookalike.

This module provides utility functions including:

- Logging setup and configuration
- Run statistics
"""

from lookalike.utils.logging import (
    ComparisonLogger,
    ComparisonStats,
    configure_logging,
)

__all__ = [
    "ComparisonLogger",
    "ComparisonStats",
    "configure_logging",
]
