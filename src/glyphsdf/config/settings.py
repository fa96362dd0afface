"""Configuration settings for glyphsdf."""

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class RoundingMode(str, Enum):
    """Rounding rule used when quantizing a normalized distance to a byte."""

    HALF_UP = "half_up"
    HALF_EVEN = "half_even"


class OutputEncoding(str, Enum):
    """How signed distances are packed into 8-bit output values."""

    LINEAR = "linear"
    CUTOFF = "cutoff"


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SdfConfig(BaseModel):
    """Configuration for distance field generation."""

    radius: int = Field(
        default=8,
        ge=1,
        description="Distance in pixels at which the signed field saturates",
    )
    threshold: int = Field(
        default=128,
        ge=1,
        le=255,
        description="Alpha values at or above this are treated as inside the glyph",
    )
    rounding: RoundingMode = Field(
        default=RoundingMode.HALF_UP,
        description="Rounding rule for linear quantization",
    )
    encoding: OutputEncoding = Field(
        default=OutputEncoding.LINEAR,
        description="Byte encoding of the signed field",
    )
    cutoff: float = Field(
        default=0.25,
        gt=0.0,
        lt=1.0,
        description="Share of the byte range used for inside distances (cutoff encoding)",
    )


class RasterConfig(BaseModel):
    """Configuration for glyph rasterization."""

    size: int = Field(
        default=24,
        ge=1,
        le=512,
        description="Font size in pixels (em height)",
    )
    buffer: int = Field(
        default=3,
        ge=0,
        le=64,
        description="Padding in pixels added around each glyph bitmap",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: LogLevel = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphSdfSettings(BaseModel):
    """Main application settings."""

    sdf: SdfConfig = Field(default_factory=SdfConfig)
    raster: RasterConfig = Field(default_factory=RasterConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphSdfSettings:
    """Get default application settings."""
    return GlyphSdfSettings()
