from dataclasses import dataclass

import numpy as np

from glyphramp.errors import ImageDecodeError, InvalidImage

SUPPORTED_CHANNELS = (1, 2, 3, 4)


@dataclass(frozen=True)
class RasterImage:
    """Decoded pixels, shape (height, width, channels), uint8, read-only."""

    width: int
    height: int
    channels: int
    pixels: np.ndarray

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidImage(None, f"Image has no pixels: {self.width}x{self.height}")
        if self.channels not in SUPPORTED_CHANNELS:
            raise ImageDecodeError(None, f"Unsupported channel count: {self.channels}")
        if self.pixels.shape != (self.height, self.width, self.channels):
            raise ImageDecodeError(
                None,
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.height}x{self.width}x{self.channels}",
            )
        if self.pixels.dtype != np.uint8:
            raise ImageDecodeError(None, f"Expected 8-bit samples, got {self.pixels.dtype}")
        self.pixels.setflags(write=False)

    @classmethod
    def from_bytes(cls, buffer: bytes, width: int, height: int, channels: int) -> "RasterImage":
        """Wrap a row-major, unpadded byte buffer."""
        if width <= 0 or height <= 0:
            raise InvalidImage(None, f"Image has no pixels: {width}x{height}")
        if channels not in SUPPORTED_CHANNELS:
            raise ImageDecodeError(None, f"Unsupported channel count: {channels}")
        expected = width * height * channels
        if len(buffer) != expected:
            raise ImageDecodeError(None, f"Expected {expected} bytes, got {len(buffer)}")
        pixels = np.frombuffer(bytes(buffer), dtype=np.uint8).reshape(height, width, channels)
        return cls(width=width, height=height, channels=channels, pixels=pixels)

    def pixel(self, x: int, y: int) -> tuple[int, ...]:
        return tuple(int(v) for v in self.pixels[y, x])
