"""Utility functions for shapemorph.

This module provides utility functions including:

- Logging setup and configuration
- Run statistics for the CLI
"""

from shapemorph.utils.logging import (
    MorphLogger,
    MorphStats,
    configure_logging,
)

__all__ = [
    "MorphLogger",
    "MorphStats",
    "configure_logging",
]
