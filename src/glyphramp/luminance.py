import math

import numpy as np

from glyphramp.errors import ImageDecodeError

# ITU-R BT.709 luma coefficients
RED_WEIGHT = 0.2126
GREEN_WEIGHT = 0.7152
BLUE_WEIGHT = 0.0722


def _split_channels(pixel, channels: int):
    """Return normalised (r, g, b), premultiplied by alpha where present."""
    if channels == 1:
        gray = pixel[0] / 255.0
        return gray, gray, gray
    if channels == 2:
        gray = (pixel[0] / 255.0) * (pixel[1] / 255.0)
        return gray, gray, gray
    if channels == 3:
        return pixel[0] / 255.0, pixel[1] / 255.0, pixel[2] / 255.0
    if channels == 4:
        alpha = pixel[3] / 255.0
        return (pixel[0] / 255.0) * alpha, (pixel[1] / 255.0) * alpha, (pixel[2] / 255.0) * alpha
    raise ImageDecodeError(None, f"Unsupported channel count: {channels}")


def luminance(pixel, channels: int) -> int:
    """Perceptual brightness of one pixel in [0, 255].

    Alpha is composited against black, so a fully transparent pixel is 0.
    """
    r, g, b = _split_channels(pixel, channels)
    y = RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b
    return min(max(math.floor(y * 255.0 + 0.5), 0), 255)


def luminance_grid(pixels: np.ndarray) -> np.ndarray:
    """Vectorised ``luminance`` over an array whose last axis holds the channels."""
    channels = pixels.shape[-1]
    planes = [pixels[..., i].astype(np.float64) for i in range(channels)]
    r, g, b = _split_channels(planes, channels)
    y = RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b
    return np.clip(np.floor(y * 255.0 + 0.5), 0, 255).astype(np.uint8)
