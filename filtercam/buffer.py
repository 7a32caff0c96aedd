"""
RGBA pixel buffer used by every filter.

A PixelBuffer is a fixed-size, row-major RGBA raster with 4 bytes per pixel.
Filters borrow it mutably, transform it in place and hand the same object
back. The raw bytes live in a flat numpy ``uint8`` array so filters can work
on a zero-copy ``(height, width, 4)`` view.

Usage:
    from filtercam.buffer import PixelBuffer

    buffer = PixelBuffer.from_bytes(640, 480, frame_bytes)
    rgba = buffer.view()          # (480, 640, 4), shares memory
    before = buffer.snapshot()    # read-only copy for neighbour lookups
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import PIL.Image

CHANNELS = 4


class PixelBuffer:
    """Fixed-stride RGBA byte buffer plus its dimensions.

    :param width: Width in pixels
    :param height: Height in pixels
    :param pixels: Flat pixel data of length ``width * height * 4``. Accepts
        bytes, bytearray, memoryview or a numpy array. Numpy ``uint8`` arrays
        are used without copying so the caller keeps seeing the changes.
    """

    __slots__ = ("_width", "_height", "_pixels")

    def __init__(self, width: int, height: int, pixels=None):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        expected = width * height * CHANNELS
        if pixels is None:
            data = np.zeros(expected, dtype=np.uint8)
        elif isinstance(pixels, np.ndarray):
            if pixels.dtype != np.uint8:
                raise ValueError(f"Expected uint8 dtype, got {pixels.dtype}")
            data = pixels.reshape(-1)
        else:
            data = np.frombuffer(bytearray(pixels), dtype=np.uint8)
        if data.size != expected:
            raise ValueError(
                f"Pixel data has {data.size} bytes, expected {expected} "
                f"for {width}x{height} RGBA"
            )
        if not data.flags.writeable:
            data = data.copy()
        self._width = int(width)
        self._height = int(height)
        self._pixels = data

    # ---- Construction ----

    @classmethod
    def blank(cls, width: int, height: int, color=(0, 0, 0, 255)) -> PixelBuffer:
        """Create a buffer filled with a single RGBA color."""
        buffer = cls(width, height)
        buffer.view()[:, :] = np.asarray(color, dtype=np.uint8)
        return buffer

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes | bytearray) -> PixelBuffer:
        """Create a buffer from raw RGBA bytes (copied)."""
        return cls(width, height, data)

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        """Wrap an ``(H, W, 4)`` uint8 array.

        Contiguous arrays are wrapped without copying, so the array and the
        buffer share memory.
        """
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise ValueError(f"Expected RGBA image (H, W, 4), got shape {array.shape}")
        if array.dtype != np.uint8:
            raise ValueError(f"Expected uint8 dtype, got {array.dtype}")
        height, width = array.shape[:2]
        return cls(width, height, np.ascontiguousarray(array))

    @classmethod
    def from_pil(cls, image: "PIL.Image.Image") -> PixelBuffer:
        """Create a buffer from a Pillow image, converting to RGBA."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(image.width, image.height, image.tobytes())

    # ---- Properties ----

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self._width * CHANNELS

    @property
    def pixels(self) -> np.ndarray:
        """The flat, mutable RGBA data."""
        return self._pixels

    def __len__(self) -> int:
        return self._pixels.size

    # ---- Access ----

    def view(self) -> np.ndarray:
        """``(H, W, 4)`` view sharing memory with :attr:`pixels`."""
        return self._pixels.reshape(self._height, self._width, CHANNELS)

    def snapshot(self) -> np.ndarray:
        """Immutable ``(H, W, 4)`` copy of the current pixel data."""
        copy = self.view().copy()
        copy.setflags(write=False)
        return copy

    def copy(self) -> PixelBuffer:
        """Independent buffer with the same content."""
        return PixelBuffer(self._width, self._height, self._pixels.copy())

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """RGBA tuple of the pixel at column ``x``, row ``y``."""
        offset = (y * self._width + x) * CHANNELS
        r, g, b, a = self._pixels[offset:offset + CHANNELS]
        return int(r), int(g), int(b), int(a)

    def to_bytes(self) -> bytes:
        return self._pixels.tobytes()

    def to_pil(self) -> "PIL.Image.Image":
        """Convert to a Pillow RGBA image (copies the data)."""
        import PIL.Image

        return PIL.Image.frombytes("RGBA", (self._width, self._height), self.to_bytes())

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self._pixels, other._pixels)
        )

    __hash__ = None

    def __repr__(self):
        return f"PixelBuffer({self._width}x{self._height})"
