"""Bitmap image reading and writing with Pillow."""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from glyphsdf.domain import Bitmap
from glyphsdf.exceptions import ImageLoadError, ImageSaveError


def load_alpha_image(path: Path, buffer: int = 0, invert: bool = False) -> Bitmap:
    """Load an image's coverage into a buffered bitmap.

    The alpha channel is used when the image has one; otherwise the image is
    converted to luminance, white meaning full coverage.

    Args:
        path: Image file
        buffer: Padding to add on every side
        invert: Treat dark pixels as coverage (for dark-on-light artwork)

    Returns:
        Buffered alpha Bitmap

    Raises:
        FileNotFoundError: If the image does not exist
        ImageLoadError: If Pillow cannot decode the file
    """
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    try:
        with Image.open(path) as image:
            if "A" in image.getbands():
                channel = image.getchannel("A")
            else:
                channel = image.convert("L")
            width, height = channel.size
            data = channel.tobytes()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(str(path), str(e)) from e

    if invert:
        data = bytes(255 - value for value in data)

    return Bitmap.from_unbuffered(data, width, height, buffer)


def save_bitmap(bitmap: Bitmap, path: Path) -> None:
    """Write a bitmap as an 8-bit grayscale image.

    The file format follows the path's extension.

    Raises:
        ImageSaveError: If the bitmap is empty or the image cannot be written
    """
    if bitmap.is_empty():
        raise ImageSaveError(str(path), "bitmap has no pixels")

    image = Image.frombytes("L", (bitmap.width, bitmap.height), bitmap.values)
    try:
        image.save(path)
    except (OSError, ValueError) as e:
        raise ImageSaveError(str(path), str(e)) from e
