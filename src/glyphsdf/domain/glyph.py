"""Glyph metrics and rendered SDF glyphs.

For an explanation of the metric terms, see the FreeType glyph conventions
tutorial (https://freetype.org/freetype2/docs/tutorial/step2.html).
"""

from dataclasses import dataclass
from typing import Any

from glyphsdf.domain.bitmap import Bitmap


@dataclass(frozen=True)
class GlyphMetrics:
    """Pixel metrics of a rasterized glyph.

    Attributes:
        width: Unbuffered bitmap width in px
        height: Unbuffered bitmap height in px
        left_bearing: Horizontal offset from the pen position to the bitmap's left edge
        top_bearing: Vertical offset from the baseline to the bitmap's top edge
        advance: Horizontal advance in px
        ascender: Typographic ascender of the font size in px
    """

    width: int
    height: int
    left_bearing: int
    top_bearing: int
    advance: int
    ascender: int

    @property
    def top(self) -> int:
        """Top bearing relative to the ascender line, as glyph atlases store it."""
        return self.top_bearing - self.ascender

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC and manifests."""
        return {
            "width": self.width,
            "height": self.height,
            "left": self.left_bearing,
            "top_bearing": self.top_bearing,
            "advance": self.advance,
            "ascender": self.ascender,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphMetrics":
        """Deserialize from dictionary."""
        return cls(
            width=data["width"],
            height=data["height"],
            left_bearing=data["left"],
            top_bearing=data["top_bearing"],
            advance=data["advance"],
            ascender=data["ascender"],
        )


@dataclass(frozen=True)
class SdfGlyph:
    """A glyph's signed distance field together with its metrics.

    Attributes:
        char_code: Unicode code point of the rendered character
        sdf: Quantized distance field, buffered
        metrics: Metrics of the unbuffered glyph
    """

    char_code: int
    sdf: Bitmap
    metrics: GlyphMetrics

    @property
    def char(self) -> str:
        """The rendered character."""
        return chr(self.char_code)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "char_code": self.char_code,
            "sdf": self.sdf.to_dict(),
            "metrics": self.metrics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SdfGlyph":
        """Deserialize from dictionary."""
        return cls(
            char_code=data["char_code"],
            sdf=Bitmap.from_dict(data["sdf"]),
            metrics=GlyphMetrics.from_dict(data["metrics"]),
        )
