"""Parallel processing orchestration for the SDF pipeline.

Every glyph is an independent task: its worker rasterizes the character,
renders the distance field and returns a serialized result. Nothing is
shared between tasks, so glyphs are distributed over a ProcessPoolExecutor
at that granularity.

Key components:
- render_glyph: Top-level picklable function for parallel execution
- SdfProcessor: Main orchestrator for fonts and single images
"""

import time
import traceback
from collections.abc import Callable, Iterable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from glyphsdf.config import GlyphSdfSettings, RasterConfig, SdfConfig
from glyphsdf.core.sdf import SdfRenderer
from glyphsdf.domain import Bitmap, SdfGlyph
from glyphsdf.exceptions import GlyphNotFoundError
from glyphsdf.io.image import load_alpha_image, save_bitmap
from glyphsdf.io.manifest import build_manifest, glyph_filename, write_manifest
from glyphsdf.io.rasterizer import GlyphRasterizer
from glyphsdf.io.reader import FontReader
from glyphsdf.utils import ProcessingLogger, ProcessingStats, configure_logging


def render_glyph(
    font_path: str,
    char_code: int,
    raster_dict: dict[str, Any],
    sdf_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rasterize one character and render its signed distance field.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        font_path: Path to the font file
        char_code: Unicode code point to render
        raster_dict: Serialized raster configuration
        sdf_dict: Serialized SDF configuration

    Returns:
        Dictionary containing either:
        - Success: {"glyph": glyph_dict, "duration_ms": float}
        - Error: {"error": str, "error_type": str, "char_code": int,
          "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        raster_config = RasterConfig(**raster_dict)
        renderer = SdfRenderer(SdfConfig(**sdf_dict))

        with GlyphRasterizer(Path(font_path), size=raster_config.size) as rasterizer:
            bitmap, metrics = rasterizer.rasterize(char_code, buffer=raster_config.buffer)

        glyph = SdfGlyph(char_code=char_code, sdf=renderer.render(bitmap), metrics=metrics)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "glyph": glyph.to_dict(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "char_code": char_code,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


def parse_chars(chars: str | Iterable[int]) -> list[int]:
    """Turn a string or code points into unique code points, keeping order."""
    codes = [ord(c) for c in chars] if isinstance(chars, str) else [int(c) for c in chars]
    return list(dict.fromkeys(codes))


class SdfProcessor:
    """Orchestrates SDF generation for fonts and images.

    Manages the font workflow:
    1. Inspect the font and drop characters it does not map
    2. Render glyphs in parallel using worker processes
    3. Collect results and update statistics
    4. Write one image per glyph plus a metrics manifest

    Example:
        settings = GlyphSdfSettings()
        processor = SdfProcessor(settings)
        stats = processor.process(
            font_path=Path("font.ttf"),
            chars="ABC",
            output_dir=Path("sdf"),
        )
    """

    def __init__(self, config: GlyphSdfSettings) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Settings containing SDF, raster, processing and logging config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.renderer = SdfRenderer(config.sdf)

    def process(
        self,
        font_path: Path,
        chars: str | Iterable[int],
        output_dir: Path,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, int, bool], None] | None = None,
    ) -> ProcessingStats:
        """Render the distance fields of characters from a font.

        Args:
            font_path: Path to input font file (TTF or OTF)
            chars: Characters or code points to render
            output_dir: Directory for glyph images and the manifest
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, char_code, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If font file does not exist
            KeyboardInterrupt: If processing is cancelled by user
        """
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting font processing",
            input=str(font_path),
            output=str(output_dir),
            max_workers=max_workers,
        )

        char_codes = parse_chars(chars)

        reader = FontReader(font_path)
        reader.load()

        try:
            font_name = reader.display_name
            self.logger.info(
                "Font loaded",
                name=font_name,
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )

            to_render: list[int] = []
            for char_code in char_codes:
                if reader.has_char(char_code):
                    to_render.append(char_code)
                else:
                    processing_logger.log_glyph_skipped(char_code, "not mapped by font")
        finally:
            reader.close()

        self.logger.info(
            "Filtered characters",
            requested=len(char_codes),
            to_render=len(to_render),
            skipped=stats.skipped_count,
        )

        rendered: list[SdfGlyph] = []
        if to_render:
            rendered = self._render_parallel(
                font_path=font_path,
                char_codes=to_render,
                max_workers=max_workers,
                processing_logger=processing_logger,
                progress_callback=progress_callback,
            )
        else:
            self.logger.info("No glyphs to render")

        self._save_glyphs(output_dir, font_name, rendered)

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _render_parallel(
        self,
        font_path: Path,
        char_codes: list[int],
        max_workers: int | None,
        processing_logger: ProcessingLogger,
        progress_callback: Callable[[int, int, int, bool], None] | None = None,
    ) -> list[SdfGlyph]:
        """Render glyphs in parallel using ProcessPoolExecutor.

        Args:
            font_path: Path to the font file
            char_codes: Code points known to be mapped by the font
            max_workers: Maximum worker processes
            processing_logger: Logger accumulating the run's statistics
            progress_callback: Optional callback(completed, total, char_code, success)

        Returns:
            Rendered glyphs in completion order
        """
        rendered: list[SdfGlyph] = []
        stats = processing_logger.stats

        raster_dict = self.config.raster.model_dump()
        sdf_dict = self.config.sdf.model_dump()

        self.logger.info(
            "Starting parallel rendering",
            glyph_count=len(char_codes),
            max_workers=max_workers,
        )

        total = len(char_codes)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for char_code in char_codes:
                processing_logger.log_glyph_start(char_code)
                future = executor.submit(
                    render_glyph,
                    str(font_path),
                    char_code,
                    raster_dict,
                    sdf_dict,
                )
                pending_futures[future] = char_code

            try:
                for future in as_completed(pending_futures):
                    char_code = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" not in result:
                            success = True
                            glyph = SdfGlyph.from_dict(result["glyph"])
                            rendered.append(glyph)
                            processing_logger.log_glyph_complete(
                                char_code=char_code,
                                width=glyph.sdf.width,
                                height=glyph.sdf.height,
                                duration_ms=result.get("duration_ms", 0.0),
                            )
                        elif result.get("error_type") == GlyphNotFoundError.__name__:
                            processing_logger.log_glyph_skipped(char_code, result["error"])
                        else:
                            processing_logger.log_glyph_error(
                                char_code=char_code,
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )

                    except Exception as e:
                        # Executor-level error
                        processing_logger.log_glyph_error(
                            char_code=char_code,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, char_code, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return rendered

    def _save_glyphs(self, output_dir: Path, font_name: str, glyphs: list[SdfGlyph]) -> None:
        """Write glyph images and the manifest.

        Empty glyphs (such as a space rendered without buffer) have no image
        but still appear in the manifest for their metrics.
        """
        output_dir.mkdir(parents=True, exist_ok=True)

        for glyph in glyphs:
            if not glyph.sdf.is_empty():
                save_bitmap(glyph.sdf, output_dir / glyph_filename(glyph.char_code))

        manifest_path = write_manifest(
            output_dir, build_manifest(font_name, self.config, glyphs)
        )

        self.logger.info(
            "Glyphs saved",
            output=str(output_dir),
            glyphs=len(glyphs),
            manifest=str(manifest_path),
        )

    def render_bitmap(self, bitmap: Bitmap) -> Bitmap:
        """Render a single bitmap with the configured SDF settings."""
        start_time = time.time()
        sdf = self.renderer.render(bitmap)
        self.logger.debug(
            "Bitmap rendered",
            width=bitmap.width,
            height=bitmap.height,
            radius=self.config.sdf.radius,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return sdf

    def process_image(
        self,
        input_path: Path,
        output_path: Path,
        invert: bool = False,
    ) -> Bitmap:
        """Render the distance field of an image file and save it.

        Args:
            input_path: Coverage image (alpha channel or luminance)
            output_path: Destination image path
            invert: Treat dark pixels as coverage

        Returns:
            The rendered SDF bitmap

        Raises:
            FileNotFoundError: If the input image does not exist
            ImageLoadError: If the input cannot be decoded
            ImageSaveError: If the output cannot be written
        """
        buffer = self.config.raster.buffer
        bitmap = load_alpha_image(input_path, buffer=buffer, invert=invert)

        if self.config.sdf.radius > buffer:
            self.logger.warning(
                "Radius exceeds buffer, edge pixels may clip",
                radius=self.config.sdf.radius,
                buffer=buffer,
            )

        sdf = self.render_bitmap(bitmap)
        save_bitmap(sdf, output_path)

        self.logger.info(
            "Image processed",
            input=str(input_path),
            output=str(output_path),
            width=sdf.width,
            height=sdf.height,
        )
        return sdf
