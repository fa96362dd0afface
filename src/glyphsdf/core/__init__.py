"""Core processing algorithms for glyphsdf.

This module contains the distance field machinery:

- Squared Euclidean distance transforms (1D primitive, separable 2D driver)
- Signed field combination, normalization and byte encoding
- Parallel batch orchestration

The transform and encoding functions are:
- Stateless (safe for use in worker processes)
- Pure (no side effects)

Key functions:
- distance_transform_1d: Lower envelope of parabolas over one line
- distance_transform_2d: Column then row pass over a binary mask
- signed_distances: Signed Euclidean distance per pixel
- render: Alpha bitmap to 8-bit SDF bitmap

Key classes:
- SdfRenderer: Renders bitmaps according to an SdfConfig
- SdfProcessor: Renders fonts and images, writes results
"""

from glyphsdf.core.processor import SdfProcessor, parse_chars, render_glyph
from glyphsdf.core.sdf import (
    SdfRenderer,
    encode_cutoff,
    normalize,
    quantize,
    render,
    signed_distances,
    threshold_mask,
)
from glyphsdf.core.transform import SENTINEL, distance_transform_1d, distance_transform_2d

__all__ = [
    "SENTINEL",
    # Processor
    "SdfProcessor",
    # Renderer
    "SdfRenderer",
    # Transforms
    "distance_transform_1d",
    "distance_transform_2d",
    "encode_cutoff",
    "normalize",
    "parse_chars",
    "quantize",
    "render",
    "render_glyph",
    "signed_distances",
    "threshold_mask",
]
