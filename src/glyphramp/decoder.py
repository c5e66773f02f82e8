import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from glyphramp.errors import ImageDecodeError
from glyphramp.model import RasterImage

logger = logging.getLogger(__name__)

# Pillow modes that map straight onto a channel count
NATIVE_MODES = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}

# Integer modes hold 16-bit samples (Pillow opens 16-bit PNG and TIFF as these);
# Pillow's own conversion to L clips at 255, so they are scaled down here
WIDE_GRAY_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")

# Everything else is converted first; unlisted modes fall back to RGB
CONVERSIONS = {
    "1": "L",
    "F": "L",
    "La": "LA",
    "PA": "RGBA",
    "RGBa": "RGBA",
    "RGBX": "RGB",
}


def _scale_wide_gray(image: Image.Image) -> np.ndarray:
    samples = np.clip(np.asarray(image).astype(np.int64), 0, 65535)
    return (samples >> 8).astype(np.uint8).reshape(image.height, image.width, 1)


def _target_mode(image: Image.Image) -> str:
    if image.mode in NATIVE_MODES:
        return image.mode
    if image.mode == "P":
        return "RGBA" if "transparency" in image.info else "RGB"
    return CONVERSIONS.get(image.mode, "RGB")


def decode_image(image: Image.Image) -> RasterImage:
    """Turn an open PIL image (first frame only) into a RasterImage."""
    if getattr(image, "n_frames", 1) > 1:
        image.seek(0)
    if image.mode in WIDE_GRAY_MODES:
        logger.debug("Scaling %s image to 8 bits", image.mode)
        arr = _scale_wide_gray(image)
        return RasterImage(width=image.width, height=image.height, channels=1, pixels=arr)
    mode = _target_mode(image)
    if mode != image.mode:
        logger.debug("Converting %s image to %s", image.mode, mode)
        image = image.convert(mode)
    channels = NATIVE_MODES[mode]
    arr = np.asarray(image, dtype=np.uint8).reshape(image.height, image.width, channels)
    return RasterImage(width=image.width, height=image.height, channels=channels, pixels=arr)


def decode(path: str | Path) -> RasterImage:
    """Decode an image file, raising ImageDecodeError with the path on any failure."""
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            raster = decode_image(image)
    except FileNotFoundError:
        raise ImageDecodeError(path, "file not found") from None
    except UnidentifiedImageError:
        raise ImageDecodeError(path, "unsupported or unrecognised image format") from None
    except ImageDecodeError as e:
        raise type(e)(path, e.reason) from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(path, str(e)) from e
    logger.debug("Decoded %s: %dx%d, %d channel(s)", path, raster.width, raster.height, raster.channels)
    return raster
