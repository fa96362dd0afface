"""Alpha bitmap container.

This module defines the Bitmap value type: a row-major grid of 8-bit values
with its dimensions and the size of the border (buffer) surrounding the glyph.
The same type carries both alpha coverage input and SDF output.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from glyphsdf.exceptions import BitmapError, DimensionError, PixelIndexError


@dataclass(frozen=True)
class Bitmap:
    """An immutable 8-bit single channel bitmap.

    Pixel data is copied into a ``bytes`` object on construction, so the
    caller's sequence can be reused freely and nothing downstream can mutate
    the bitmap.

    Attributes:
        values: Row-major pixel values, exactly ``width * height`` bytes
        width: Full width in pixels, buffer included
        height: Full height in pixels, buffer included
        buffer: Number of padding pixels on each side of the glyph
    """

    values: bytes
    width: int
    height: int
    buffer: int = 0
    _rows: tuple[bytes, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("width", "height", "buffer"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise BitmapError(f"Bitmap {name} must be an integer, got {value!r}")

        if self.width < 0 or self.height < 0:
            raise BitmapError(
                f"Bitmap dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if self.buffer < 0:
            raise BitmapError(f"Buffer must be non-negative, got {self.buffer}")

        if isinstance(self.values, int):
            raise BitmapError("Pixel values must be a sequence, not an integer")

        try:
            data = bytes(self.values)
        except (TypeError, ValueError) as e:
            raise BitmapError(f"Pixel values must be integers in 0..255: {e}") from e

        expected = self.width * self.height
        if len(data) != expected:
            raise DimensionError("width * height", expected, len(data))

        object.__setattr__(self, "values", data)
        object.__setattr__(
            self,
            "_rows",
            tuple(data[y * self.width : (y + 1) * self.width] for y in range(self.height)),
        )

    @classmethod
    def from_unbuffered(
        cls,
        values: Sequence[int] | bytes,
        width: int,
        height: int,
        buffer: int,
    ) -> "Bitmap":
        """Create a bitmap from raw glyph data, padded by ``buffer`` pixels.

        Most rasterizers return a tight bitmap; SDF generation needs room
        around the outline for outside distances, so the glyph is copied into
        the centre of a zero-filled bitmap that is ``2 * buffer`` pixels wider
        and taller.

        Args:
            values: Row-major alpha values of the unbuffered glyph
            width: Unbuffered width in pixels
            height: Unbuffered height in pixels
            buffer: Padding to add on every side

        Returns:
            Buffered Bitmap

        Raises:
            DimensionError: If ``len(values) != width * height``
        """
        source = cls(values=values, width=width, height=height, buffer=0)
        if buffer < 0:
            raise BitmapError(f"Buffer must be non-negative, got {buffer}")

        full_width = width + 2 * buffer
        full_height = height + 2 * buffer
        padded = bytearray(full_width * full_height)

        for y, row in enumerate(source.rows()):
            start = (y + buffer) * full_width + buffer
            padded[start : start + width] = row

        return cls(values=bytes(padded), width=full_width, height=full_height, buffer=buffer)

    @property
    def inner_width(self) -> int:
        """Width of the glyph area without the buffer."""
        return max(self.width - 2 * self.buffer, 0)

    @property
    def inner_height(self) -> int:
        """Height of the glyph area without the buffer."""
        return max(self.height - 2 * self.buffer, 0)

    def get(self, x: int, y: int) -> int:
        """Get the value of the pixel at column ``x``, row ``y``.

        Raises:
            PixelIndexError: If the coordinates fall outside the bitmap.
                Negative indices are rejected rather than wrapped.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PixelIndexError(x, y, self.width, self.height)
        return self._rows[y][x]

    def rows(self) -> Iterator[bytes]:
        """Iterate over rows from top to bottom."""
        return iter(self._rows)

    def is_empty(self) -> bool:
        """Check if the bitmap has no pixels at all."""
        return self.width == 0 or self.height == 0

    def with_values(self, values: Sequence[int] | bytes) -> "Bitmap":
        """Create a bitmap of the same shape and buffer with new pixel data."""
        return Bitmap(values=bytes(values), width=self.width, height=self.height, buffer=self.buffer)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "values": self.values,
            "width": self.width,
            "height": self.height,
            "buffer": self.buffer,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bitmap":
        """Deserialize from dictionary."""
        return cls(
            values=data["values"],
            width=data["width"],
            height=data["height"],
            buffer=data.get("buffer", 0),
        )
