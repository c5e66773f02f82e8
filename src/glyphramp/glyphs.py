import math

import numpy as np

from glyphramp.errors import ConfigurationError


def validate_ramp(ramp: str) -> str:
    """Reject an empty ramp. Run once at startup, not per pixel."""
    if not ramp:
        raise ConfigurationError("Charset must not be empty.")
    return ramp


def map_to_glyph(luminance: int, ramp: str, invert: bool = False) -> str:
    """Quantise a luminance in [0, 255] to a glyph from a dark-to-light ramp."""
    n = len(ramp)
    if n == 1:
        return ramp
    t = luminance / 255.0  # 0 = dark, 1 = light
    if invert:
        t = 1.0 - t
    index = min(max(math.floor(t * (n - 1) + 0.5), 0), n - 1)
    return ramp[index]


def map_row(luminances: np.ndarray, ramp: str, invert: bool = False) -> str:
    """Vectorised ``map_to_glyph`` for one row of luminance values."""
    n = len(ramp)
    if n == 1:
        return ramp * len(luminances)
    t = np.asarray(luminances, dtype=np.float64) / 255.0
    if invert:
        t = 1.0 - t
    indices = np.clip(np.floor(t * (n - 1) + 0.5), 0, n - 1).astype(np.intp)
    return "".join(ramp[i] for i in indices)
