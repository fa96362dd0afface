"""Domain models for glyphsdf.

This module contains the value types flowing through the SDF pipeline. All
models are:

- Immutable (frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of the FreeType and fontTools implementation details

Key classes:
- Bitmap: 8-bit pixel grid with width, height and buffer size
- GlyphMetrics: Pixel metrics of a rasterized glyph
- SdfGlyph: A rendered distance field with its metrics
"""

from glyphsdf.domain.bitmap import Bitmap
from glyphsdf.domain.glyph import GlyphMetrics, SdfGlyph

__all__: list[str] = [
    "Bitmap",
    "GlyphMetrics",
    "SdfGlyph",
]
