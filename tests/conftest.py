"""
Pytest configuration and shared fixtures for thumbcrop tests.

Sample images are generated with Pillow inside pytest's temporary directory,
so no binary fixtures are checked in.
"""

from pathlib import Path

import pytest
from PIL import Image


def pattern_image(size, mode="RGB"):
    """
    Build an image whose pixels differ by position.

    Args:
        size: (width, height) of the image
        mode: Pillow mode of the result

    Returns:
        A PIL Image with a deterministic colour pattern
    """
    width, height = size
    img = Image.new("RGB", size)
    img.putdata(
        [(x % 256, y % 256, (x + y) % 256) for y in range(height) for x in range(width)]
    )
    return img.convert(mode) if mode != "RGB" else img


@pytest.fixture
def make_image(tmp_path):
    """
    Provide a factory writing pattern images into a temporary directory.

    Returns:
        Callable (name, size=(600, 500), mode="RGB", **save_kwargs) -> Path
    """

    def _make(name, size=(600, 500), mode="RGB", **save_kwargs):
        path = Path(tmp_path) / name
        pattern_image(size, mode).save(path, **save_kwargs)
        return path

    return _make


@pytest.fixture
def png_path(make_image):
    """A 600x500 PNG source."""
    return make_image("photo.png")


@pytest.fixture
def jpeg_path(make_image):
    """A 600x500 JPEG source."""
    return make_image("photo.jpg")


@pytest.fixture
def tiff_path(make_image):
    """A 600x500 uncompressed TIFF source."""
    return make_image("photo.tiff")


@pytest.fixture
def striped_tiff_path(make_image):
    """A 600x500 uncompressed TIFF stored as 16-row strips."""
    return make_image("striped.tiff", tiffinfo={278: 16})
