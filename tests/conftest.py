"""Pytest fixtures for the mask map generator tests."""

import numpy as np
import pytest
from PIL import Image

from backend.texture_classes import PixelBuffer


@pytest.fixture
def uniform():
    """Factory for single-color buffers."""

    def _uniform(rgba, width=2, height=2):
        return PixelBuffer.filled(width, height, rgba)

    return _uniform


@pytest.fixture
def random_buffer():
    """Factory for seeded random buffers with values in [0, 1)."""

    def _random_buffer(width, height, seed=0):
        rng = np.random.default_rng(seed)
        return PixelBuffer(rng.random((height, width, 4), dtype=np.float32))

    return _random_buffer


@pytest.fixture
def write_image(tmp_path):
    """Writes a solid-color image into tmp_path and returns its path."""

    def _write_image(filename, color, size=(4, 4), mode="RGBA"):
        path = tmp_path / filename
        Image.new(mode, size, color).save(path)
        return str(path)

    return _write_image
