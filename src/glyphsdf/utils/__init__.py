"""Utility functions for glyphsdf.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics
"""

from glyphsdf.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
    glyph_label,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
    "glyph_label",
]
