"""I/O layer for glyphsdf.

This module connects the SDF core to the outside world: fonts go in through
fontTools and FreeType, images in and out through Pillow.

Key responsibilities:
- Inspect TTF/OTF fonts (names, format, coverage)
- Rasterize characters into buffered alpha bitmaps
- Load coverage bitmaps from image files
- Save distance fields as grayscale images with a metrics manifest

Key classes:
- FontReader: Load fonts and query coverage
- GlyphRasterizer: Render characters into alpha bitmaps
"""

from glyphsdf.io.image import load_alpha_image, save_bitmap
from glyphsdf.io.manifest import MANIFEST_NAME, build_manifest, glyph_filename, write_manifest
from glyphsdf.io.rasterizer import GlyphRasterizer
from glyphsdf.io.reader import FontReader

__all__ = [
    "MANIFEST_NAME",
    "FontReader",
    "GlyphRasterizer",
    "build_manifest",
    "glyph_filename",
    "load_alpha_image",
    "save_bitmap",
    "write_manifest",
]
