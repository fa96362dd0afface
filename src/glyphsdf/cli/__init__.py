"""Command-line interface for glyphsdf.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Parallel glyph rendering with a progress bar
- Single image conversion
- Verbose/quiet output modes
- Detailed error reporting
"""

from glyphsdf.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
