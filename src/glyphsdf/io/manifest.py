"""Metrics manifest for batches of rendered glyphs.

The manifest records, per glyph, the image file it was written to and the
glyph metrics a text renderer needs to place the distance field.
"""

import json
from pathlib import Path
from typing import Any

from glyphsdf.config import GlyphSdfSettings
from glyphsdf.domain import SdfGlyph

MANIFEST_NAME = "manifest.json"


def glyph_filename(char_code: int) -> str:
    """Image file name for a code point, e.g. ``0041.png``."""
    return f"{char_code:04X}.png"


def build_manifest(
    font_name: str,
    settings: GlyphSdfSettings,
    glyphs: list[SdfGlyph],
) -> dict[str, Any]:
    """Build the manifest document for rendered glyphs, sorted by code point."""
    entries = []
    for glyph in sorted(glyphs, key=lambda g: g.char_code):
        entry: dict[str, Any] = {
            "id": glyph.char_code,
            "char": glyph.char,
            "file": None if glyph.sdf.is_empty() else glyph_filename(glyph.char_code),
            "bitmap_width": glyph.sdf.width,
            "bitmap_height": glyph.sdf.height,
            "top": glyph.metrics.top,
        }
        entry.update(glyph.metrics.to_dict())
        entries.append(entry)

    return {
        "name": font_name,
        "size": settings.raster.size,
        "buffer": settings.raster.buffer,
        "sdf": settings.sdf.model_dump(mode="json"),
        "glyphs": entries,
    }


def write_manifest(output_dir: Path, manifest: dict[str, Any]) -> Path:
    """Write the manifest as JSON into ``output_dir`` and return its path."""
    path = output_dir / MANIFEST_NAME
    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False), encoding="utf-8")
    return path
