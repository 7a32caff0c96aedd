"""Neighbourhood, geometric and generator filters.

This module provides the filters whose output pixel depends on pixels
other than itself:
- Pixelate (block replication)
- Mirror (horizontal flip)
- Blur (3x3 box mean)
- Emboss (diagonal gradient)
- Sketch (grayscale edge map)
- Rainbow (hue gradient generator, ignores the input colors)

Mirror, blur, emboss and sketch read from a read-only snapshot taken before
the pass writes anything, so a pass never reads its own output. Blur, emboss
and sketch only write interior pixels; the one-pixel border keeps its value.

All filters take an RGBA uint8 array (H, W, 4), modify it in place and
return it.

Usage:
    from filtercam.filters.spatial import blur, mirror

    blur(buffer.view())
"""
import numpy as np

from .color import clamp_u8, grayscale, check_rgba

PIXELATE_BLOCK_SIZE = 8
EMBOSS_OFFSET = 128


def _snapshot(image: np.ndarray) -> np.ndarray:
    copy = image.copy()
    copy.setflags(write=False)
    return copy


def _has_interior(image: np.ndarray) -> bool:
    return image.shape[0] >= 3 and image.shape[1] >= 3


# ============================================================================
# Pixelate / Mirror
# ============================================================================

def pixelate(image: np.ndarray, block_size: int = PIXELATE_BLOCK_SIZE) -> np.ndarray:
    """Fill each block_size x block_size tile with its top-left pixel's RGB.

    Tiles on the right and bottom edge are cut off at the image border when
    the size is not a multiple of ``block_size``.

    Args:
        image: RGBA uint8 array (H, W, 4), modified in place
        block_size: Tile edge length in pixels

    Returns:
        The same array
    """
    check_rgba(image)
    height, width = image.shape[:2]
    if height == 0 or width == 0:
        return image
    block_size = max(1, int(block_size))
    anchors = image[::block_size, ::block_size, :3]
    tiles = np.repeat(np.repeat(anchors, block_size, axis=0), block_size, axis=1)
    image[:, :, :3] = tiles[:height, :width]
    return image


def mirror(image: np.ndarray) -> np.ndarray:
    """Flip horizontally.

    Whole RGBA pixels move, so alpha travels with its pixel.
    """
    check_rgba(image)
    source = _snapshot(image)
    image[:, :, :] = source[:, ::-1, :]
    return image


# ============================================================================
# Blur / Emboss
# ============================================================================

def blur(image: np.ndarray) -> np.ndarray:
    """Unweighted 3x3 box blur over the interior pixels.

    Each interior color channel becomes the mean of its 3x3 neighbourhood in
    the unmodified source. Border rows and columns are left as they are.
    """
    check_rgba(image)
    if not _has_interior(image):
        return image
    source = _snapshot(image)[:, :, :3].astype(np.uint16)
    height, width = source.shape[:2]
    total = np.zeros((height - 2, width - 2, 3), dtype=np.uint16)
    for dy in range(3):
        for dx in range(3):
            total += source[dy:dy + height - 2, dx:dx + width - 2]
    image[1:-1, 1:-1, :3] = clamp_u8(total / 9.0)
    return image


def emboss(image: np.ndarray) -> np.ndarray:
    """Diagonal relief: 128 + (top-left - bottom-right) per channel.

    Computed for interior pixels from the unmodified source, clamped to
    0-255. Border pixels are left as they are.
    """
    check_rgba(image)
    if not _has_interior(image):
        return image
    source = _snapshot(image)[:, :, :3].astype(np.int16)
    relief = EMBOSS_OFFSET + source[:-2, :-2] - source[2:, 2:]
    image[1:-1, 1:-1, :3] = clamp_u8(relief)
    return image


# ============================================================================
# Sketch
# ============================================================================

def sketch(image: np.ndarray) -> np.ndarray:
    """Pencil sketch: grayscale followed by an inverted edge map.

    For every interior pixel of the grayscale image::

        diff = |top - bottom| + |left - right|
        value = 255 - min(diff, 255)

    Border pixels keep their grayscale value.
    """
    check_rgba(image)
    grayscale(image)
    if not _has_interior(image):
        return image
    gray = _snapshot(image)[:, :, 0].astype(np.int16)
    top = gray[:-2, 1:-1]
    bottom = gray[2:, 1:-1]
    left = gray[1:-1, :-2]
    right = gray[1:-1, 2:]
    diff = np.abs(top - bottom) + np.abs(left - right)
    value = (255 - np.minimum(diff, 255)).astype(np.uint8)
    image[1:-1, 1:-1, :3] = value[:, :, np.newaxis]
    return image


# ============================================================================
# Rainbow
# ============================================================================

def hsv_to_rgb(hue: np.ndarray, saturation: float = 1.0, value: float = 1.0) -> np.ndarray:
    """Convert hue in degrees to RGB floats (0.0-1.0) with the 6-sector formula.

    Args:
        hue: Array of hues in degrees, 0 <= hue < 360
        saturation: Saturation 0.0-1.0
        value: Value 0.0-1.0

    Returns:
        Float array of shape hue.shape + (3,)
    """
    h = np.asarray(hue, dtype=np.float64) / 60.0
    c = value * saturation
    x = c * (1 - np.abs(h % 2 - 1))
    m = value - c
    zero = np.zeros_like(x)
    chroma = np.full_like(x, c)
    sector = np.floor(h).astype(np.int64)

    conditions = [sector == 0, sector == 1, sector == 2, sector == 3, sector == 4]
    r = np.select(conditions, [chroma, x, zero, zero, x], default=chroma)
    g = np.select(conditions, [x, chroma, chroma, x, zero], default=zero)
    b = np.select(conditions, [zero, zero, x, chroma, chroma], default=x)
    return np.stack([r + m, g + m, b + m], axis=-1)


def rainbow(image: np.ndarray) -> np.ndarray:
    """Diagonal hue gradient, hue = (x + y) mod 360 at full saturation.

    The input colors are ignored; alpha is kept.
    """
    check_rgba(image)
    height, width = image.shape[:2]
    ys, xs = np.indices((height, width))
    hue = (xs + ys) % 360
    image[:, :, :3] = clamp_u8(hsv_to_rgb(hue) * 255)
    return image


__all__ = [
    'pixelate', 'mirror',
    'blur', 'emboss',
    'sketch',
    'hsv_to_rgb', 'rainbow',
    'PIXELATE_BLOCK_SIZE', 'EMBOSS_OFFSET',
]
