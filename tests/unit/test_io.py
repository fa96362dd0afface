"""Unit tests for the I/O layer.

Tests for FontReader, GlyphRasterizer, image helpers and the manifest.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from PIL import Image

from glyphsdf.config import GlyphSdfSettings, SdfConfig
from glyphsdf.domain import Bitmap, GlyphMetrics, SdfGlyph
from glyphsdf.exceptions import (
    FontLoadError,
    GlyphNotFoundError,
    ImageLoadError,
    ImageSaveError,
)
from glyphsdf.io.image import load_alpha_image, save_bitmap
from glyphsdf.io.manifest import build_manifest, glyph_filename, write_manifest
from glyphsdf.io.rasterizer import GlyphRasterizer, unpack_rows
from glyphsdf.io.reader import FontReader


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_format_before_load(self):
        """Test accessing format before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.format

    def test_has_char_before_load(self):
        """Test coverage queries before loading raise RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.has_char(65)

    @patch("glyphsdf.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_opentype(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test format property for OpenType fonts."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(side_effect=lambda x: x == "CFF ")
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.otf"))
        reader.load()

        assert reader.format == "OpenType"

    @patch("glyphsdf.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_has_char(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test coverage lookup through the best cmap."""
        mock_font = MagicMock()
        mock_font.getBestCmap.return_value = {65: "A", 38: "ampersand"}
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.ttf"))
        reader.load()

        assert reader.has_char(65)
        assert not reader.has_char(66)
        mock_font.getBestCmap.assert_called_once()

    @patch("glyphsdf.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_display_name(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test family and style joined from the name table."""
        name_table = Mock()
        name_table.getBestFamilyName.return_value = "Open Sans"
        name_table.getBestSubFamilyName.return_value = "Bold"
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(side_effect=lambda x: x == "name")
        mock_font.__getitem__ = Mock(return_value=name_table)
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.ttf"))
        reader.load()

        assert reader.display_name == "Open Sans Bold"

    @patch("glyphsdf.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_display_name_fallback(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test file stem used when the font has no name table."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(return_value=False)
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("MyFont-Regular.ttf"))
        reader.load()

        assert reader.display_name == "MyFont-Regular"

    @patch("glyphsdf.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_context_manager(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test that the context manager closes the font."""
        mock_font = MagicMock()
        mock_ttfont.return_value = mock_font

        with FontReader(Path("test.ttf")) as reader:
            assert reader._font is mock_font

        mock_font.close.assert_called_once()
        assert reader._font is None


def make_face(width: int = 2, rows: int = 2, pitch: int = 4) -> MagicMock:
    """Build a FreeType face mock holding a rendered 2x2 glyph."""
    face = MagicMock()
    face.get_char_index.return_value = 36
    face.glyph.bitmap.width = width
    face.glyph.bitmap.rows = rows
    face.glyph.bitmap.pitch = pitch
    face.glyph.bitmap.buffer = [10, 20, 0, 0, 30, 40, 0, 0]
    face.glyph.bitmap_left = 1
    face.glyph.bitmap_top = 9
    face.glyph.metrics.horiAdvance = 7 << 6
    face.size.ascender = 11 << 6
    return face


class TestUnpackRows:
    """Tests for FreeType buffer unpacking."""

    def test_padded_pitch(self):
        """Test that row padding is dropped."""
        assert unpack_rows([1, 2, 0, 3, 4, 0], width=2, rows=2, pitch=3) == bytes([1, 2, 3, 4])

    def test_negative_pitch(self):
        """Test that bottom-up rows are flipped."""
        assert unpack_rows([3, 4, 1, 2], width=2, rows=2, pitch=-2) == bytes([1, 2, 3, 4])

    def test_empty(self):
        """Test a glyph without pixels."""
        assert unpack_rows([], width=0, rows=0, pitch=0) == b""


class TestGlyphRasterizer:
    """Tests for GlyphRasterizer class."""

    def test_rasterize_before_load(self):
        """Test that rasterizing before loading raises RuntimeError."""
        rasterizer = GlyphRasterizer(Path("test.ttf"), size=24)
        with pytest.raises(RuntimeError, match="Font not loaded"):
            rasterizer.rasterize(65, buffer=3)

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent font raises FileNotFoundError."""
        rasterizer = GlyphRasterizer(Path("nonexistent.ttf"), size=24)
        with pytest.raises(FileNotFoundError):
            rasterizer.load()

    @patch("glyphsdf.io.rasterizer.freetype.Face")
    @patch.object(Path, "exists", return_value=True)
    def test_load_sets_pixel_size(self, _mock_exists, mock_face_class):  # noqa: ARG002
        """Test that the em size is set in 26.6 fixed point."""
        face = make_face()
        mock_face_class.return_value = face

        GlyphRasterizer(Path("test.ttf"), size=24).load()

        face.set_char_size.assert_called_once_with(0, 24 << 6, 72, 72)

    @patch("glyphsdf.io.rasterizer.freetype")
    @patch.object(Path, "exists", return_value=True)
    def test_load_failure(self, _mock_exists, mock_freetype):  # noqa: ARG002
        """Test that FreeType errors become FontLoadError."""

        class FakeFTException(Exception):
            pass

        mock_freetype.FT_Exception = FakeFTException
        mock_freetype.Face.side_effect = FakeFTException("unknown file format")

        with pytest.raises(FontLoadError, match="unknown file format"):
            GlyphRasterizer(Path("broken.ttf"), size=24).load()

    @patch("glyphsdf.io.rasterizer.freetype.Face")
    @patch.object(Path, "exists", return_value=True)
    def test_rasterize(self, _mock_exists, mock_face_class):  # noqa: ARG002
        """Test bitmap buffering and metrics extraction."""
        mock_face_class.return_value = make_face()

        with GlyphRasterizer(Path("test.ttf"), size=24) as rasterizer:
            bitmap, metrics = rasterizer.rasterize(ord("A"), buffer=1)

        assert (bitmap.width, bitmap.height, bitmap.buffer) == (4, 4, 1)
        assert bitmap.get(1, 1) == 10
        assert bitmap.get(2, 2) == 40
        assert bitmap.get(0, 0) == 0
        assert metrics == GlyphMetrics(
            width=2, height=2, left_bearing=1, top_bearing=9, advance=7, ascender=11
        )

    @patch("glyphsdf.io.rasterizer.freetype.Face")
    @patch.object(Path, "exists", return_value=True)
    def test_rasterize_missing_glyph(self, _mock_exists, mock_face_class):  # noqa: ARG002
        """Test that unmapped characters raise GlyphNotFoundError."""
        face = make_face()
        face.get_char_index.return_value = 0
        mock_face_class.return_value = face

        with GlyphRasterizer(Path("test.ttf"), size=24) as rasterizer:
            with pytest.raises(GlyphNotFoundError) as exc_info:
                rasterizer.rasterize(0x4E00, buffer=3)

        assert exc_info.value.char_code == 0x4E00
        face.load_glyph.assert_not_called()


class TestImages:
    """Tests for image loading and saving."""

    def test_load_alpha_channel(self, tmp_path: Path):
        """Test that the alpha channel is used when present."""
        path = tmp_path / "glyph.png"
        image = Image.new("RGBA", (2, 1), (255, 255, 255, 0))
        image.putpixel((1, 0), (0, 0, 0, 200))
        image.save(path)

        bitmap = load_alpha_image(path, buffer=1)

        assert (bitmap.width, bitmap.height, bitmap.buffer) == (4, 3, 1)
        assert bitmap.get(1, 1) == 0
        assert bitmap.get(2, 1) == 200

    def test_load_luminance(self, tmp_path: Path):
        """Test grayscale images used as coverage."""
        path = tmp_path / "glyph.png"
        Image.frombytes("L", (2, 1), bytes([30, 220])).save(path)

        bitmap = load_alpha_image(path)

        assert bitmap.values == bytes([30, 220])

    def test_load_inverted(self, tmp_path: Path):
        """Test dark-on-light artwork."""
        path = tmp_path / "glyph.png"
        Image.frombytes("L", (2, 1), bytes([0, 255])).save(path)

        bitmap = load_alpha_image(path, invert=True)

        assert bitmap.values == bytes([255, 0])

    def test_load_missing(self, tmp_path: Path):
        """Test that a missing image raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_alpha_image(tmp_path / "missing.png")

    def test_load_garbage(self, tmp_path: Path):
        """Test that undecodable files raise ImageLoadError."""
        path = tmp_path / "glyph.png"
        path.write_bytes(b"not an image")

        with pytest.raises(ImageLoadError):
            load_alpha_image(path)

    def test_save_bitmap(self, tmp_path: Path):
        """Test writing a grayscale image."""
        path = tmp_path / "sdf.png"
        save_bitmap(Bitmap(values=[1, 128, 255, 64], width=2, height=2), path)

        with Image.open(path) as image:
            assert image.mode == "L"
            assert image.size == (2, 2)
            assert image.tobytes() == bytes([1, 128, 255, 64])

    def test_save_empty_bitmap(self, tmp_path: Path):
        """Test that empty bitmaps cannot be saved."""
        with pytest.raises(ImageSaveError):
            save_bitmap(Bitmap(values=b"", width=0, height=0), tmp_path / "empty.png")


class TestManifest:
    """Tests for the metrics manifest."""

    @pytest.fixture
    def glyphs(self) -> list[SdfGlyph]:
        """Two rendered glyphs, one of them empty."""
        metrics = GlyphMetrics(width=2, height=2, left_bearing=1, top_bearing=9, advance=7, ascender=11)
        return [
            SdfGlyph(char_code=ord("B"), sdf=Bitmap(values=[128] * 16, width=4, height=4, buffer=1), metrics=metrics),
            SdfGlyph(
                char_code=ord(" "),
                sdf=Bitmap(values=b"", width=0, height=0),
                metrics=GlyphMetrics(width=0, height=0, left_bearing=0, top_bearing=0, advance=5, ascender=11),
            ),
        ]

    def test_glyph_filename(self):
        """Test file names derived from code points."""
        assert glyph_filename(0x41) == "0041.png"
        assert glyph_filename(0x1F600) == "1F600.png"

    def test_build_manifest(self, glyphs: list[SdfGlyph]):
        """Test manifest content and ordering."""
        settings = GlyphSdfSettings(sdf=SdfConfig(radius=4))

        manifest = build_manifest("Test Sans Regular", settings, glyphs)

        assert manifest["name"] == "Test Sans Regular"
        assert manifest["sdf"]["radius"] == 4
        assert manifest["sdf"]["rounding"] == "half_up"
        assert [g["id"] for g in manifest["glyphs"]] == [32, 66]
        space, b = manifest["glyphs"]
        assert space["file"] is None
        assert b["file"] == "0042.png"
        assert b["top"] == -2
        assert b["bitmap_width"] == 4

    def test_write_manifest(self, tmp_path: Path, glyphs: list[SdfGlyph]):
        """Test that the manifest is valid JSON on disk."""
        manifest = build_manifest("Test", GlyphSdfSettings(), glyphs)

        path = write_manifest(tmp_path, manifest)

        assert path.name == "manifest.json"
        assert json.loads(path.read_text(encoding="utf-8")) == manifest
