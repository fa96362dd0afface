"""Unit tests for signed distance field rendering and encoding."""

import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from glyphsdf.config import OutputEncoding, RoundingMode, SdfConfig
from glyphsdf.core.sdf import (
    SdfRenderer,
    encode_cutoff,
    normalize,
    quantize,
    render,
    signed_distances,
    threshold_mask,
)
from glyphsdf.domain import Bitmap
from glyphsdf.exceptions import (
    InvalidCutoffError,
    InvalidRadiusError,
    InvalidThresholdError,
)


@pytest.fixture
def dot_bitmap() -> Bitmap:
    """5x5 bitmap with a single foreground pixel at (2, 2)."""
    values = [0] * 25
    values[2 * 5 + 2] = 255
    return Bitmap(values=values, width=5, height=5, buffer=2)


@pytest.fixture
def half_plane_bitmap() -> Bitmap:
    """12x3 bitmap, left half covered."""
    row = [255] * 6 + [0] * 6
    return Bitmap(values=row * 3, width=12, height=3, buffer=4)


class TestThresholdMask:
    """Tests for inside mask extraction."""

    def test_default_threshold(self):
        """Test that alpha >= 128 is inside."""
        bitmap = Bitmap(values=[0, 127, 128, 255], width=4, height=1)

        assert threshold_mask(bitmap) == [False, False, True, True]

    def test_custom_threshold(self):
        """Test a rasterizer-specific threshold."""
        bitmap = Bitmap(values=[0, 127, 128, 255], width=4, height=1)

        assert threshold_mask(bitmap, threshold=200) == [False, False, False, True]

    @pytest.mark.parametrize("threshold", [0, 256, -1])
    def test_invalid_threshold(self, threshold: int):
        """Test that out-of-range thresholds are rejected."""
        bitmap = Bitmap(values=[0], width=1, height=1)

        with pytest.raises(InvalidThresholdError):
            threshold_mask(bitmap, threshold=threshold)


class TestSignedDistances:
    """Tests for the combined signed field."""

    def test_sign_convention(self, dot_bitmap: Bitmap):
        """Test positive inside, negative outside."""
        distances = signed_distances(dot_bitmap)

        assert distances[2 * 5 + 2] == 1.0
        assert distances[2 * 5 + 1] == -1.0
        assert distances[1 * 5 + 1] == pytest.approx(-math.sqrt(2))
        assert distances[0] == pytest.approx(-math.sqrt(8))

    def test_half_plane_distances(self, half_plane_bitmap: Bitmap):
        """Test distances across a straight vertical edge."""
        distances = signed_distances(half_plane_bitmap)
        row = distances[:12]

        assert row == [6.0, 5.0, 4.0, 3.0, 2.0, 1.0, -1.0, -2.0, -3.0, -4.0, -5.0, -6.0]


class TestQuantize:
    """Tests for linear byte quantization."""

    def test_reference_values(self):
        """Test edge, saturation and half-pixel values."""
        assert quantize([0.0, 1.0, -1.0, 10.0, -10.0], radius=2) == [128, 192, 65, 255, 1]

    def test_half_even_rounding(self):
        """Test that half-even rounding differs only on exact halves."""
        values = quantize([0.0, 1.0, -1.0], radius=2, rounding=RoundingMode.HALF_EVEN)

        assert values == [128, 192, 64]

    @pytest.mark.parametrize("radius", [0, -3])
    def test_invalid_radius(self, radius: int):
        """Test that non-positive radii are rejected."""
        with pytest.raises(InvalidRadiusError):
            quantize([0.0], radius=radius)


class TestNormalizeAndCutoff:
    """Tests for the normalized field and cutoff encoding."""

    def test_normalize_clamps(self):
        """Test scaling to radius units clamped to [-1, 1]."""
        assert normalize([0.0, 4.0, -2.0, 100.0, -100.0], radius=4) == [0.0, 1.0, -0.5, 1.0, -1.0]

    def test_encode_cutoff(self):
        """Test edge at 255 * (1 - cutoff) and saturation at both ends."""
        assert encode_cutoff([0.0, 1.0, -1.0], cutoff=0.25) == [191, 255, 0]

    def test_inside_share_of_range(self):
        """Test that inside values land at or above the edge value."""
        normalized = [x / 10 for x in range(-10, 11)]
        encoded = encode_cutoff(normalized, cutoff=0.25)

        inside = [value for n, value in zip(normalized, encoded) if n >= 0]
        outside = [value for n, value in zip(normalized, encoded) if n < 0]
        assert all(value >= 191 for value in inside)
        assert all(value < 191 for value in outside)

    @pytest.mark.parametrize("cutoff", [0.0, 1.0, -0.5, 1.5])
    def test_invalid_cutoff(self, cutoff: float):
        """Test that cutoffs outside (0, 1) are rejected."""
        with pytest.raises(InvalidCutoffError):
            encode_cutoff([0.0], cutoff=cutoff)


class TestRender:
    """Tests for the render operation."""

    def test_dot_scenario(self, dot_bitmap: Bitmap):
        """Test a single foreground pixel rendered with radius 2."""
        sdf = render(dot_bitmap, radius=2)

        assert sdf.get(2, 2) == 192
        # Axis neighbours at distance 1
        assert sdf.get(2, 1) == sdf.get(1, 2) == sdf.get(3, 2) == sdf.get(2, 3) == 65
        # Diagonal neighbours at distance sqrt(2)
        assert sdf.get(1, 1) == sdf.get(3, 3) == 38
        # Distance 2 and beyond saturate
        assert sdf.get(2, 0) == 1
        assert sdf.get(0, 0) == 1

    def test_euclidean_ordering(self, dot_bitmap: Bitmap):
        """Test that values radiate outward by Euclidean distance."""
        sdf = render(dot_bitmap, radius=2)

        assert sdf.get(2, 2) > 128 > sdf.get(2, 1) > sdf.get(1, 1) > sdf.get(2, 0)
        assert sdf.get(1, 1) != sdf.get(2, 1)

    def test_shape_preserved(self, half_plane_bitmap: Bitmap):
        """Test that width, height and buffer carry through."""
        sdf = render(half_plane_bitmap, radius=4)

        assert sdf.width == half_plane_bitmap.width
        assert sdf.height == half_plane_bitmap.height
        assert sdf.buffer == half_plane_bitmap.buffer
        assert all(0 <= value <= 255 for value in sdf.values)

    def test_monotonic_across_edge(self, half_plane_bitmap: Bitmap):
        """Test that values never increase moving away from the glyph."""
        sdf = render(half_plane_bitmap, radius=4)
        row = list(next(sdf.rows()))

        assert row == [255, 255, 255, 223, 192, 160, 96, 65, 33, 1, 1, 1]
        assert all(a >= b for a, b in zip(row, row[1:]))

    def test_all_background(self):
        """Test that an empty glyph saturates to the outside value."""
        bitmap = Bitmap(values=[0] * 16, width=4, height=4, buffer=2)

        sdf = render(bitmap, radius=3)

        assert set(sdf.values) == {1}

    def test_all_foreground(self):
        """Test that a fully covered bitmap saturates to 255."""
        bitmap = Bitmap(values=[255] * 16, width=4, height=4, buffer=2)

        sdf = render(bitmap, radius=3)

        assert set(sdf.values) == {255}

    def test_deterministic(self, dot_bitmap: Bitmap):
        """Test that rendering twice gives identical output."""
        assert render(dot_bitmap, radius=2) == render(dot_bitmap, radius=2)

    def test_concurrent_renders(self, half_plane_bitmap: Bitmap):
        """Test that renders on several threads match a sequential render."""
        expected = render(half_plane_bitmap, radius=3)

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lambda _: render(half_plane_bitmap, radius=3), range(16)))

        assert all(result == expected for result in results)

    def test_input_unchanged(self, dot_bitmap: Bitmap):
        """Test that the source bitmap is not modified."""
        before = dot_bitmap.values
        render(dot_bitmap, radius=2)

        assert dot_bitmap.values == before

    def test_empty_bitmap(self):
        """Test a zero-sized bitmap."""
        sdf = render(Bitmap(values=b"", width=0, height=0), radius=8)

        assert sdf.is_empty()

    @pytest.mark.parametrize("radius", [0, -1, 2.5, True])
    def test_invalid_radius_always_fails(self, dot_bitmap: Bitmap, radius: object):
        """Test that invalid radii fail before any computation."""
        for _ in range(3):
            with pytest.raises(InvalidRadiusError):
                render(dot_bitmap, radius=radius)  # type: ignore[arg-type]


class TestSdfRenderer:
    """Tests for the config-driven renderer."""

    def test_linear_encoding(self, dot_bitmap: Bitmap):
        """Test that the default config matches render()."""
        renderer = SdfRenderer(SdfConfig(radius=2))

        assert renderer.render(dot_bitmap) == render(dot_bitmap, radius=2)

    def test_default_config(self):
        """Test renderer defaults."""
        renderer = SdfRenderer()

        assert renderer.config.radius == 8
        assert renderer.config.threshold == 128

    def test_cutoff_encoding_empty_glyph(self):
        """Test an empty buffered glyph under cutoff encoding."""
        bitmap = Bitmap.from_unbuffered([], 0, 0, 3)
        renderer = SdfRenderer(SdfConfig(radius=8, encoding=OutputEncoding.CUTOFF, cutoff=0.25))

        sdf = renderer.render(bitmap)

        assert (sdf.width, sdf.height) == (6, 6)
        assert sdf.values == bytes(36)

    def test_cutoff_encoding_edge(self, half_plane_bitmap: Bitmap):
        """Test that cutoff encoding orders inside above outside."""
        renderer = SdfRenderer(SdfConfig(radius=4, encoding=OutputEncoding.CUTOFF))
        row = list(next(renderer.render(half_plane_bitmap).rows()))

        assert row[5] > 191 > row[6]
        assert all(a >= b for a, b in zip(row, row[1:]))
