class GlyphRampError(Exception):
    """Base class for every error the converter raises."""


class ArgumentError(GlyphRampError, ValueError):
    """Malformed or missing command-line values."""


class ConfigurationError(GlyphRampError, ValueError):
    """Unusable settings, e.g. an empty glyph ramp or a non-finite aspect."""


class ImageDecodeError(GlyphRampError, ValueError):
    """The image could not be decoded into a raster."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image: {path}: {reason}" if path is not None else reason)


class InvalidImage(ImageDecodeError):
    """A raster with zero width or height."""


class OutputError(GlyphRampError, OSError):
    """The output file could not be opened."""
