"""glyphsdf - Convert rasterized glyphs into signed distance fields.

glyphsdf takes an 8-bit alpha coverage bitmap, as produced by a font
rasterizer, and computes a signed distance field: every pixel encodes the
distance to the nearest glyph outline, positive inside the shape and negative
outside, clamped to a radius and quantized into a single byte.

Example:
    $ glyphsdf glyph OpenSans-Regular.ttf --chars "A&" --output-dir sdf/

This renders one SDF image per character plus a metrics manifest.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
