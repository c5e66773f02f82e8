"""Nearest-neighbour resampling of a source raster onto a character grid.

``char_aspect`` is the width/height ratio of one character cell (about 0.5
for most monospace fonts). A cell is ``1 / char_aspect`` times taller than it
is wide, so the row count is the proportional height scaled by
``char_aspect``.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from glyphramp.errors import ConfigurationError, InvalidImage

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _source_index(out: int, source_size: int, out_size: int) -> int:
    src = math.floor((out + 0.5) * source_size / out_size)
    return min(max(src, 0), source_size - 1)


@dataclass(frozen=True)
class GeometryPlan:
    width: int
    height: int
    cols: int
    rows: int
    char_aspect: float

    def source(self, x: int, y: int) -> tuple[int, int]:
        """Source pixel sampled for output cell (x, y), sampled at the cell centre."""
        return (
            _source_index(x, self.width, self.cols),
            _source_index(y, self.height, self.rows),
        )

    def source_columns(self) -> np.ndarray:
        """Source x for every output column."""
        xs = np.floor((np.arange(self.cols) + 0.5) * self.width / self.cols).astype(np.intp)
        return np.clip(xs, 0, self.width - 1)

    def source_rows(self) -> np.ndarray:
        """Source y for every output row."""
        ys = np.floor((np.arange(self.rows) + 0.5) * self.height / self.rows).astype(np.intp)
        return np.clip(ys, 0, self.height - 1)


def plan(width: int, height: int, target_cols: int, char_aspect: float) -> GeometryPlan:
    if width <= 0 or height <= 0:
        raise InvalidImage(None, f"Image has no pixels: {width}x{height}")
    if target_cols < 1:
        raise ConfigurationError(f"Width must be at least 1 column, got {target_cols}")
    if not math.isfinite(char_aspect) or char_aspect <= 0:
        raise ConfigurationError(f"Character aspect must be a positive number, got {char_aspect}")

    scale = target_cols / width
    rows = max(1, round_half_up(height * scale * char_aspect))
    logger.debug(
        "Planned %dx%d grid for %dx%d image (aspect %.3f)", target_cols, rows, width, height, char_aspect
    )
    return GeometryPlan(width=width, height=height, cols=target_cols, rows=rows, char_aspect=char_aspect)
