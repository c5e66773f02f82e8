from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from PIL import Image

from glyphramp.charsets import DEFAULT_RAMP
from glyphramp.decoder import decode, decode_image
from glyphramp.geometry import GeometryPlan, plan
from glyphramp.glyphs import map_row, validate_ramp
from glyphramp.luminance import luminance_grid
from glyphramp.model import RasterImage

DEFAULT_WIDTH = 120
DEFAULT_ASPECT = 0.5


def iter_rows(raster: RasterImage, grid: GeometryPlan, ramp: str, invert: bool = False) -> Iterator[str]:
    """Yield one line of glyphs per output row, sampling only that row's pixels."""
    xs = grid.source_columns()
    for y in grid.source_rows():
        row = raster.pixels[y, xs]  # (cols, channels)
        yield map_row(luminance_grid(row), ramp, invert)


def write_rows(rows: Iterable[str], sink: TextIO) -> int:
    count = 0
    for row in rows:
        sink.write(row)
        sink.write("\n")
        count += 1
    return count


def image_to_ascii(
    image: RasterImage | Image.Image | str | Path,
    width: int = DEFAULT_WIDTH,
    char_aspect: float = DEFAULT_ASPECT,
    ramp: str = DEFAULT_RAMP,
    invert: bool = False,
) -> str:
    validate_ramp(ramp)
    if isinstance(image, Image.Image):
        image = decode_image(image)
    elif not isinstance(image, RasterImage):
        image = decode(image)

    grid = plan(image.width, image.height, width, char_aspect)
    return "\n".join(iter_rows(image, grid, ramp, invert))
