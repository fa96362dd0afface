"""Signed distance field rendering.

This module turns an alpha bitmap into a signed distance field:

1. Threshold alpha into an inside/outside mask
2. Run the 2D distance transform seeded by inside pixels and by outside pixels
3. Combine both into one signed Euclidean distance (positive inside)
4. Clamp to the radius and encode each pixel as a byte

The linear encoding puts the outline at 128, ``radius`` pixels inside at 255
and ``radius`` pixels outside at 1. The cutoff encoding reproduces the byte
layout used by Mapbox GL glyph sheets, where the outline sits at
``255 * (1 - cutoff)``.

All functions are pure, stateless, and safe to call from worker processes.
"""

import math
from collections.abc import Callable, Sequence

from glyphsdf.config import OutputEncoding, RoundingMode, SdfConfig
from glyphsdf.core.transform import distance_transform_2d
from glyphsdf.domain import Bitmap
from glyphsdf.exceptions import (
    InvalidCutoffError,
    InvalidRadiusError,
    InvalidThresholdError,
    InvariantViolationError,
)

DEFAULT_THRESHOLD = 128
EDGE_VALUE = 128
EDGE_SCALE = 127


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _round_half_even(value: float) -> int:
    return round(value)


_ROUNDERS: dict[RoundingMode, Callable[[float], int]] = {
    RoundingMode.HALF_UP: _round_half_up,
    RoundingMode.HALF_EVEN: _round_half_even,
}


def validate_radius(radius: object) -> int:
    """Check that ``radius`` is a positive integer.

    Raises:
        InvalidRadiusError: For zero, negative or non-integer radii
    """
    if isinstance(radius, bool) or not isinstance(radius, int) or radius <= 0:
        raise InvalidRadiusError(radius)
    return radius


def validate_threshold(threshold: object) -> int:
    """Check that ``threshold`` is an alpha value in 1..255.

    Raises:
        InvalidThresholdError: For values outside 1..255 or non-integers
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int) or not 1 <= threshold <= 255:
        raise InvalidThresholdError(threshold)
    return threshold


def threshold_mask(bitmap: Bitmap, threshold: int = DEFAULT_THRESHOLD) -> list[bool]:
    """Build the row-major inside mask, ``alpha >= threshold``."""
    validate_threshold(threshold)
    return [alpha >= threshold for alpha in bitmap.values]


def signed_distances(bitmap: Bitmap, threshold: int = DEFAULT_THRESHOLD) -> list[float]:
    """Compute the signed Euclidean distance to the outline for every pixel.

    Inside pixels get the distance to the nearest outside pixel, outside
    pixels the negated distance to the nearest inside pixel. Distances are
    measured between pixel centres, so pixels next to the outline are one
    pixel away from it, not zero.

    Args:
        bitmap: Source alpha bitmap
        threshold: Alpha values at or above this are inside

    Returns:
        Row-major signed distances in pixels. A bitmap without any inside
        (or outside) pixels yields distances of magnitude ``sqrt(SENTINEL)``.

    Raises:
        InvalidThresholdError: If threshold is outside 1..255
        InvariantViolationError: If a derived field disagrees with the bitmap shape
    """
    inside = threshold_mask(bitmap, threshold)
    outside = [not flag for flag in inside]

    dist_to_inside = distance_transform_2d(inside, bitmap.width, bitmap.height)
    dist_to_outside = distance_transform_2d(outside, bitmap.width, bitmap.height)

    expected = bitmap.width * bitmap.height
    if len(dist_to_inside) != expected or len(dist_to_outside) != expected:
        raise InvariantViolationError(
            f"Distance fields have {len(dist_to_inside)} and {len(dist_to_outside)} "
            f"entries, expected {expected}"
        )

    return [
        math.sqrt(d_out) if flag else -math.sqrt(d_in)
        for flag, d_in, d_out in zip(inside, dist_to_inside, dist_to_outside)
    ]


def quantize(
    distances: Sequence[float],
    radius: int,
    rounding: RoundingMode = RoundingMode.HALF_UP,
) -> list[int]:
    """Encode signed distances linearly into bytes.

    ``value = round(128 + clamp(d, -radius, radius) * 127 / radius)``,
    clamped to 0..255.

    Raises:
        InvalidRadiusError: If radius is not a positive integer
    """
    validate_radius(radius)
    to_int = _ROUNDERS[RoundingMode(rounding)]

    encoded = []
    for distance in distances:
        clamped = max(-radius, min(radius, distance))
        value = to_int(EDGE_VALUE + clamped * EDGE_SCALE / radius)
        encoded.append(max(0, min(255, value)))
    return encoded


def normalize(distances: Sequence[float], radius: int) -> list[float]:
    """Scale signed distances to units of ``radius``, clamped to [-1, 1].

    Raises:
        InvalidRadiusError: If radius is not a positive integer
    """
    validate_radius(radius)
    return [max(-1.0, min(1.0, distance / radius)) for distance in distances]


def encode_cutoff(normalized: Sequence[float], cutoff: float) -> list[int]:
    """Encode a normalized field using a cutoff split of the byte range.

    The lowest ``1 - cutoff`` share of the range encodes outside distances
    and the highest ``cutoff`` share inside distances, so the outline maps
    to ``255 * (1 - cutoff)``. Values are truncated and saturate at 0 and 255.

    Args:
        normalized: Field from ``normalize``, positive inside
        cutoff: Split point, strictly between 0 and 1

    Raises:
        InvalidCutoffError: If cutoff is not in (0, 1)
    """
    if not 0.0 < cutoff < 1.0:
        raise InvalidCutoffError(cutoff)
    return [
        max(0, min(255, int(255.0 - 255.0 * (cutoff - value))))
        for value in normalized
    ]


def render(
    bitmap: Bitmap,
    radius: int,
    threshold: int = DEFAULT_THRESHOLD,
    rounding: RoundingMode = RoundingMode.HALF_UP,
) -> Bitmap:
    """Render the linearly encoded signed distance field of a bitmap.

    Args:
        bitmap: Source alpha bitmap
        radius: Distance in pixels at which the field saturates; should not
            exceed the bitmap's buffer
        threshold: Alpha values at or above this are inside
        rounding: Rounding rule for quantization

    Returns:
        New Bitmap with the same width, height and buffer. Pixels at or
        beyond ``radius`` outside the glyph encode to 1, so an
        all-background bitmap renders as all 1.

    Raises:
        InvalidRadiusError: If radius is not a positive integer
        InvalidThresholdError: If threshold is outside 1..255
    """
    validate_radius(radius)
    validate_threshold(threshold)

    distances = signed_distances(bitmap, threshold)
    return bitmap.with_values(quantize(distances, radius, rounding))


class SdfRenderer:
    """Renders distance fields according to an ``SdfConfig``.

    Example:
        renderer = SdfRenderer(SdfConfig(radius=8))
        sdf = renderer.render(bitmap)
    """

    def __init__(self, config: SdfConfig | None = None) -> None:
        self.config = config or SdfConfig()

    def render(self, bitmap: Bitmap) -> Bitmap:
        """Render ``bitmap`` with the configured radius, threshold and encoding."""
        config = self.config
        validate_radius(config.radius)

        if config.encoding == OutputEncoding.LINEAR:
            return render(bitmap, config.radius, config.threshold, config.rounding)

        if not 0.0 < config.cutoff < 1.0:
            raise InvalidCutoffError(config.cutoff)
        distances = signed_distances(bitmap, config.threshold)
        return bitmap.with_values(encode_cutoff(normalize(distances, config.radius), config.cutoff))
