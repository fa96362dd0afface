"""Font reader for inspecting TTF/OTF fonts.

This module provides the FontReader class for loading font files with
fontTools and reading the font-level information the SDF pipeline needs:
names, format, units per em and character coverage.
"""

from pathlib import Path

from fontTools.ttLib import TTFont


class FontReader:
    """Loads TTF/OTF fonts and answers coverage questions.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            print(reader.family_name, reader.has_char(ord("A")))
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._cmap: dict[int, str] | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))
        self._cmap = None

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    @property
    def family_name(self) -> str | None:
        """Return the font's family name from the name table."""
        font = self._require_font()
        if "name" not in font:
            return None
        return font["name"].getBestFamilyName()

    @property
    def style_name(self) -> str | None:
        """Return the font's style (subfamily) name from the name table."""
        font = self._require_font()
        if "name" not in font:
            return None
        return font["name"].getBestSubFamilyName()

    @property
    def display_name(self) -> str:
        """Family and style joined, e.g. "Open Sans Bold".

        Falls back to the file stem when the font carries no family name.
        """
        family = self.family_name
        if not family:
            return self._font_path.stem
        style = self.style_name
        return f"{family} {style}" if style else family

    def has_char(self, char_code: int) -> bool:
        """Check whether the font's cmap maps ``char_code`` to a glyph.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if self._cmap is None:
            self._cmap = font.getBestCmap() or {}
        return char_code in self._cmap

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
