"""
Pytest fixtures for filtercam tests
"""

import numpy as np
import pytest

from filtercam import PixelBuffer, CollectingSink, MemoryStorage


@pytest.fixture
def random_buffer() -> PixelBuffer:
    """A 17x13 buffer of random RGBA values.

    The size is deliberately not a multiple of the pixelate block size.
    """
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(13, 17, 4), dtype=np.uint8)
    return PixelBuffer.from_array(pixels)


@pytest.fixture
def white_buffer() -> PixelBuffer:
    """A 2x2 opaque white buffer."""
    return PixelBuffer.blank(2, 2, (255, 255, 255, 255))


@pytest.fixture
def striped_buffer() -> PixelBuffer:
    """A 4x4 buffer of alternating black (even) and white (odd) rows."""
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[1::2, :, :3] = 255
    pixels[:, :, 3] = 255
    return PixelBuffer.from_array(pixels)


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()
