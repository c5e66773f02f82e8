import numpy as np
import pytest
from PIL import Image

from glyphramp.decoder import decode, decode_image
from glyphramp.errors import ImageDecodeError


@pytest.mark.parametrize(
    "mode,colour,channels",
    [
        ("L", 77, 1),
        ("LA", (77, 200), 2),
        ("RGB", (10, 20, 30), 3),
        ("RGBA", (10, 20, 30, 40), 4),
    ],
)
def test_native_modes(save_image, mode, colour, channels):
    path = save_image(Image.new(mode, (4, 3), colour))
    raster = decode(path)
    assert (raster.width, raster.height, raster.channels) == (4, 3, channels)
    expected = colour if isinstance(colour, tuple) else (colour,)
    assert raster.pixel(3, 2) == expected


def test_bilevel_becomes_gray(save_image):
    path = save_image(Image.new("1", (5, 5), 1))
    raster = decode(path)
    assert raster.channels == 1
    assert raster.pixel(0, 0) == (255,)


def test_palette_without_transparency_becomes_rgb():
    image = Image.new("RGB", (2, 2), (255, 0, 0)).convert("P")
    raster = decode_image(image)
    assert raster.channels == 3
    assert raster.pixel(1, 1) == (255, 0, 0)


def test_palette_with_transparency_becomes_rgba():
    image = Image.new("P", (2, 2), 0)
    image.putpalette([0, 0, 0, 255, 255, 255])
    image.info["transparency"] = 0
    raster = decode_image(image)
    assert raster.channels == 4
    assert raster.pixel(0, 0)[3] == 0


def test_cmyk_becomes_rgb():
    raster = decode_image(Image.new("CMYK", (2, 2), (0, 0, 0, 0)))
    assert raster.channels == 3
    assert raster.pixel(0, 0) == (255, 255, 255)


def test_missing_file(tmp_path):
    path = tmp_path / "missing.png"
    with pytest.raises(ImageDecodeError, match="missing.png") as info:
        decode(path)
    assert info.value.path == path
    assert info.value.reason == "file not found"


def test_not_an_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("definitely not a png")
    with pytest.raises(ImageDecodeError, match="unsupported or unrecognised"):
        decode(path)


def test_truncated_file(save_image):
    path = save_image(Image.effect_noise((64, 64), 64))
    data = path.read_bytes()
    path.write_bytes(data[: len(data) // 2])
    with pytest.raises(ImageDecodeError, match="Failed to load image"):
        decode(path)


@pytest.mark.parametrize("value,expected", [(32768, 128), (65535, 255), (1000, 3), (0, 0)])
def test_sixteen_bit_gray_is_scaled(save_image, value, expected):
    image = Image.fromarray(np.full((4, 4), value, dtype=np.uint16))
    raster = decode(save_image(image))
    assert raster.channels == 1
    assert raster.pixel(3, 3) == (expected,)


def test_sixteen_bit_gray_in_memory():
    raster = decode_image(Image.fromarray(np.array([[0, 256], [32768, 65535]], dtype=np.uint16)))
    assert [raster.pixel(x, y) for y in range(2) for x in range(2)] == [(0,), (1,), (128,), (255,)]


def test_oversized_image(save_image, monkeypatch):
    path = save_image(Image.new("L", (8, 8), 0))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    with pytest.raises(ImageDecodeError, match="Failed to load image"):
        decode(path)
