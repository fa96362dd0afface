"""CLI application entry point for glyphsdf.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from glyphsdf import __version__
from glyphsdf.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_font_info,
    print_header,
    print_image_success,
    print_processing_info,
    print_sdf_settings,
    print_step,
    print_success,
)
from glyphsdf.config import (
    GlyphSdfSettings,
    LoggingConfig,
    OutputEncoding,
    ProcessingConfig,
    RasterConfig,
    RoundingMode,
    SdfConfig,
)
from glyphsdf.core import SdfProcessor, parse_chars
from glyphsdf.exceptions import FontLoadError, GlyphSdfError
from glyphsdf.io import FontReader

app = typer.Typer(
    name="glyphsdf",
    help="Convert rasterized glyphs into 8-bit signed distance fields.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphsdf[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert rasterized glyphs into 8-bit signed distance fields."""


def _build_sdf_config(
    radius: int,
    threshold: int,
    rounding: str,
    encoding: str,
    cutoff: float,
) -> SdfConfig:
    """Validate enum-valued options and build the SDF configuration."""
    try:
        rounding_mode = RoundingMode(rounding.lower())
    except ValueError:
        print_error(
            f"Invalid rounding mode: {rounding}",
            details="Valid values: half_up, half_even",
        )
        raise typer.Exit(code=1)

    try:
        output_encoding = OutputEncoding(encoding.lower())
    except ValueError:
        print_error(
            f"Invalid encoding: {encoding}",
            details="Valid values: linear, cutoff",
        )
        raise typer.Exit(code=1)

    try:
        return SdfConfig(
            radius=radius,
            threshold=threshold,
            rounding=rounding_mode,
            encoding=output_encoding,
            cutoff=cutoff,
        )
    except ValidationError as e:
        print_error("Invalid SDF settings", details=str(e))
        raise typer.Exit(code=1)


def _build_logging_config(log_file: Path | None, log_level: str, quiet: bool) -> LoggingConfig:
    """Validate the console log level and build the logging configuration."""
    try:
        return LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper() if not quiet else "WARNING",
        )
    except ValidationError:
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL",
        )
        raise typer.Exit(code=1)


@app.command()
def glyph(
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    chars: Annotated[
        str,
        typer.Option(
            "--chars",
            "-c",
            help="Characters to render",
            show_default=False,
        ),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (default: {name}-sdf)",
        ),
    ] = None,
    size: Annotated[
        int,
        typer.Option("--size", "-s", help="Font size in pixels", min=1, max=512),
    ] = 24,
    buffer: Annotated[
        int,
        typer.Option("--buffer", "-b", help="Padding around each glyph in pixels", min=0, max=64),
    ] = 3,
    radius: Annotated[
        int,
        typer.Option("--radius", "-r", help="Distance at which the field saturates", min=1),
    ] = 8,
    threshold: Annotated[
        int,
        typer.Option("--threshold", "-t", help="Alpha threshold for inside pixels", min=1, max=255),
    ] = 128,
    rounding: Annotated[
        str,
        typer.Option("--rounding", help="Quantization rounding (half_up|half_even)"),
    ] = "half_up",
    encoding: Annotated[
        str,
        typer.Option("--encoding", "-e", help="Byte encoding (linear|cutoff)"),
    ] = "linear",
    cutoff: Annotated[
        float,
        typer.Option("--cutoff", help="Inside share of the byte range for cutoff encoding"),
    ] = 0.25,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Render signed distance fields for characters of a font.

    Writes one grayscale PNG per character, named by code point, and a
    manifest.json with the glyph metrics.

    Example:
        glyphsdf glyph OpenSans-Regular.ttf --chars "Hello&" -o sdf/
    """
    if not font.exists():
        print_error(
            f"Input file not found: {font}",
            details=f"The file '{font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not font.is_file():
        print_error(
            f"Input path is not a file: {font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    if not chars:
        print_error("No characters given", details="Pass the characters to render with --chars.")
        raise typer.Exit(code=1)

    sdf_config = _build_sdf_config(radius, threshold, rounding, encoding, cutoff)
    logging_config = _build_logging_config(log_file, log_level, quiet)

    if not quiet:
        print_header(__version__)

    settings = GlyphSdfSettings(
        sdf=sdf_config,
        raster=RasterConfig(size=size, buffer=buffer),
        processing=ProcessingConfig(max_workers=workers),
        logging=logging_config,
    )

    actual_output_dir = output_dir if output_dir is not None else font.with_name(f"{font.stem}-sdf")
    char_count = len(parse_chars(chars))

    try:
        if not quiet:
            print_step("Loading font")
            try:
                with FontReader(font) as reader:
                    print_font_info(
                        font_path=str(font),
                        font_name=reader.display_name,
                        font_type=reader.format,
                        glyph_count=reader.glyph_count,
                    )
            except Exception as e:
                raise FontLoadError(str(font), str(e)) from e

            print_sdf_settings(radius=radius, buffer=buffer, size=size)

            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Rendering")
            print_processing_info(actual_workers, is_auto=(workers is None))

        processor = SdfProcessor(settings)
        stats = None

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Rendering {char_count} glyphs",
                        total=char_count,
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.process(
                        font_path=font,
                        chars=chars,
                        output_dir=actual_output_dir,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(
                    font_path=font,
                    chars=chars,
                    output_dir=actual_output_dir,
                    max_workers=workers,
                )
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=stats.processed_count if stats else 0,
                    cancelled=stats.cancelled_count if stats else 0,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_path=str(actual_output_dir),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                skipped=stats.skipped_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_glyph_time_ms,
                min_time_ms=stats.min_glyph_time_ms,
                max_time_ms=stats.max_glyph_time_ms,
            )

        if stats.error_count > 0:
            raise typer.Exit(code=1)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphSdfError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def image(
    input_image: Annotated[
        Path,
        typer.Argument(help="Coverage image (alpha channel or luminance)", show_default=False),
    ],
    output: Annotated[
        Path,
        typer.Argument(help="Output image path", show_default=False),
    ],
    buffer: Annotated[
        int,
        typer.Option("--buffer", "-b", help="Padding added around the image in pixels", min=0, max=64),
    ] = 3,
    radius: Annotated[
        int,
        typer.Option("--radius", "-r", help="Distance at which the field saturates", min=1),
    ] = 8,
    threshold: Annotated[
        int,
        typer.Option("--threshold", "-t", help="Alpha threshold for inside pixels", min=1, max=255),
    ] = 128,
    rounding: Annotated[
        str,
        typer.Option("--rounding", help="Quantization rounding (half_up|half_even)"),
    ] = "half_up",
    encoding: Annotated[
        str,
        typer.Option("--encoding", "-e", help="Byte encoding (linear|cutoff)"),
    ] = "linear",
    cutoff: Annotated[
        float,
        typer.Option("--cutoff", help="Inside share of the byte range for cutoff encoding"),
    ] = 0.25,
    invert: Annotated[
        bool,
        typer.Option("--invert", help="Treat dark pixels as coverage"),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Render the signed distance field of a single image.

    Example:
        glyphsdf image glyph.png glyph-sdf.png --radius 4 --buffer 4
    """
    if not input_image.is_file():
        print_error(f"Input file not found: {input_image}")
        raise typer.Exit(code=1)

    sdf_config = _build_sdf_config(radius, threshold, rounding, encoding, cutoff)
    logging_config = _build_logging_config(log_file, log_level, quiet)

    if not quiet:
        print_header(__version__)
        print_sdf_settings(radius=radius, buffer=buffer)

    settings = GlyphSdfSettings(
        sdf=sdf_config,
        raster=RasterConfig(buffer=buffer),
        logging=logging_config,
    )

    try:
        processor = SdfProcessor(settings)
        sdf = processor.process_image(input_image, output, invert=invert)
    except GlyphSdfError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        print_image_success(str(output), sdf.width, sdf.height)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
