import pytest
from PIL import Image


@pytest.fixture
def save_image(tmp_path):
    """Write a PIL image into tmp_path and return its path."""

    def _save(image: Image.Image, name: str = "input.png"):
        path = tmp_path / name
        image.save(path)
        return path

    return _save
