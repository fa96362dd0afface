"""Configuration management for glyphsdf.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- SdfConfig: Distance field radius, threshold and quantization settings
- RasterConfig: Glyph rasterization settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- GlyphSdfSettings: Main application settings
"""

from glyphsdf.config.settings import (
    GlyphSdfSettings,
    LoggingConfig,
    OutputEncoding,
    ProcessingConfig,
    RasterConfig,
    RoundingMode,
    SdfConfig,
    get_default_settings,
)

__all__ = [
    "GlyphSdfSettings",
    "LoggingConfig",
    "OutputEncoding",
    "ProcessingConfig",
    "RasterConfig",
    "RoundingMode",
    "SdfConfig",
    "get_default_settings",
]
