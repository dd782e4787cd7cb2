import numpy as np
import pytest

from filterlab.core import Color, PixelBuffer


@pytest.fixture
def black_3x3():
    return PixelBuffer(3, 3)


@pytest.fixture
def random_buffer():
    rng = np.random.default_rng(1234)
    return PixelBuffer.from_array(rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8))


@pytest.fixture
def make_buffer():
    """Build a buffer from rows of (r, g, b) tuples, indexed [y][x]."""
    def _make(rows):
        return PixelBuffer.from_array(np.array(rows, dtype=np.uint8))
    return _make


@pytest.fixture
def solid():
    def _solid(width, height, rgb):
        return PixelBuffer.filled(width, height, Color(*rgb))
    return _solid
