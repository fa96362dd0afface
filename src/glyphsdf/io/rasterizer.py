"""Glyph rasterization with FreeType.

FreeType turns a glyph outline into the 8-bit alpha coverage bitmap the
SDF core consumes. Glyphs are loaded without hinting so the coverage follows
the outline rather than the pixel grid.
"""

from pathlib import Path

import freetype

from glyphsdf.domain import Bitmap, GlyphMetrics
from glyphsdf.exceptions import FontLoadError, GlyphNotFoundError, GlyphRenderError


def unpack_rows(buffer: list[int], width: int, rows: int, pitch: int) -> bytes:
    """Copy a FreeType bitmap buffer into tightly packed row-major bytes.

    FreeType rows may carry padding (``pitch > width``), and a negative pitch
    means the rows are stored bottom-up.
    """
    stride = abs(pitch)
    packed = bytearray(width * rows)
    for y in range(rows):
        source_row = y if pitch >= 0 else rows - 1 - y
        start = source_row * stride
        packed[y * width : (y + 1) * width] = bytes(buffer[start : start + width])
    return bytes(packed)


class GlyphRasterizer:
    """Rasterizes single characters of a font at a fixed pixel size.

    Example:
        with GlyphRasterizer(Path("font.ttf"), size=24) as rasterizer:
            bitmap, metrics = rasterizer.rasterize(ord("A"), buffer=3)
    """

    def __init__(self, font_path: Path, size: int, face_index: int = 0) -> None:
        """Initialize the rasterizer.

        Args:
            font_path: Path to a font file FreeType can read
            size: Em size in pixels
            face_index: Face to use in font collections
        """
        self._font_path = font_path
        self._size = size
        self._face_index = face_index
        self._face: freetype.Face | None = None

    def load(self) -> None:
        """Open the font face and set its pixel size.

        Raises:
            FileNotFoundError: If the font file does not exist
            FontLoadError: If FreeType cannot open the font
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            face = freetype.Face(str(self._font_path), self._face_index)
            # Char width 0 means "same as height"; 72 dpi makes points equal pixels
            face.set_char_size(0, self._size << 6, 72, 72)
        except freetype.FT_Exception as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        self._face = face

    @property
    def size(self) -> int:
        """Em size in pixels."""
        return self._size

    def rasterize(self, char_code: int, buffer: int) -> tuple[Bitmap, GlyphMetrics]:
        """Render the alpha bitmap and metrics of a character.

        Args:
            char_code: Unicode code point
            buffer: Padding added around the glyph bitmap

        Returns:
            Tuple of (buffered alpha bitmap, unbuffered glyph metrics)

        Raises:
            RuntimeError: If the face has not been loaded yet
            GlyphNotFoundError: If the font does not map the character
            GlyphRenderError: If FreeType fails to render the glyph
        """
        if self._face is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        face = self._face

        glyph_index = face.get_char_index(char_code)
        if glyph_index == 0:
            raise GlyphNotFoundError(char_code)

        try:
            face.load_glyph(glyph_index, freetype.FT_LOAD_NO_HINTING | freetype.FT_LOAD_RENDER)
        except freetype.FT_Exception as e:
            raise GlyphRenderError(char_code, str(e)) from e

        slot = face.glyph
        source = slot.bitmap
        alpha = unpack_rows(source.buffer, source.width, source.rows, source.pitch)
        bitmap = Bitmap.from_unbuffered(alpha, source.width, source.rows, buffer)

        metrics = GlyphMetrics(
            width=source.width,
            height=source.rows,
            left_bearing=slot.bitmap_left,
            top_bearing=slot.bitmap_top,
            advance=slot.metrics.horiAdvance >> 6,
            ascender=face.size.ascender >> 6,
        )
        return bitmap, metrics

    def close(self) -> None:
        """Release the FreeType face."""
        self._face = None

    def __enter__(self) -> "GlyphRasterizer":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
