"""Exception hierarchy for glyphsdf."""


class GlyphSdfError(Exception):
    """Base exception for all glyphsdf errors."""

    pass


class BitmapError(GlyphSdfError):
    """Errors related to bitmap construction or access."""

    pass


class DimensionError(BitmapError):
    """Declared bitmap dimensions do not match the pixel data."""

    def __init__(self, formula: str, expected: int, actual: int) -> None:
        self.formula = formula
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid bitmap dimensions: the data length must be equal to "
            f"{formula} = {expected}, but is equal to {actual}"
        )


class PixelIndexError(BitmapError, IndexError):
    """Pixel coordinates outside the bitmap."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"Pixel ({x}, {y}) is outside a {width}x{height} bitmap")


class ConfigurationError(GlyphSdfError):
    """Invalid rendering parameters."""

    pass


class InvalidRadiusError(ConfigurationError):
    """SDF radius must be a positive number of pixels."""

    def __init__(self, radius: object) -> None:
        self.radius = radius
        super().__init__(f"Radius must be a positive integer, but {radius!r} was provided")


class InvalidThresholdError(ConfigurationError):
    """Alpha threshold outside the 8-bit range."""

    def __init__(self, threshold: object) -> None:
        self.threshold = threshold
        super().__init__(f"Threshold must be between 1 and 255, but {threshold!r} was provided")


class InvalidCutoffError(ConfigurationError):
    """Cutoff outside the open interval (0, 1)."""

    def __init__(self, cutoff: float) -> None:
        self.cutoff = cutoff
        super().__init__(
            f"Cutoff values must be between 0 and 1 (both non-inclusive), "
            f"but {cutoff} was provided"
        )


class InvariantViolationError(GlyphSdfError):
    """Internal consistency check failed.

    Only raised when derived working arrays disagree with the source bitmap,
    which indicates a bug rather than bad input.
    """

    pass


class FontError(GlyphSdfError):
    """Errors related to font loading or glyph rasterization."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested character is not mapped by the font."""

    def __init__(self, char_code: int) -> None:
        self.char_code = char_code
        super().__init__(f"Glyph for U+{char_code:04X} not found in font")


class GlyphRenderError(FontError):
    """Error rasterizing a specific glyph."""

    def __init__(self, char_code: int, reason: str) -> None:
        self.char_code = char_code
        self.reason = reason
        super().__init__(f"Error rendering glyph U+{char_code:04X}: {reason}")


class ImageError(GlyphSdfError):
    """Errors reading or writing bitmap images."""

    pass


class ImageLoadError(ImageError):
    """Error loading an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class ImageSaveError(ImageError):
    """Error saving an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save image '{path}': {reason}")

