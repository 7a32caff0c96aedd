"""Pointwise color filters.

This module provides the per-pixel color transforms:
- Grayscale, Invert, Sepia, Vintage
- Red / Green / Blue tint
- Neon glow
- Posterize
- Warm / Cool tone

## Input Format

All filters operate on **numpy RGBA arrays**:
- Shape: (height, width, 4)
- dtype: np.uint8, values 0-255

Each filter writes into the given array and returns it, so passing
``PixelBuffer.view()`` transforms the buffer in place. Alpha is never
touched.

## Rounding

Results are clamped to 0-255 and rounded half to even, which is how an
8-bit clamped byte buffer stores fractional values. Multi-step filters
round between steps because the intermediate result is stored in the
buffer before the next step reads it.

Usage:
    from filtercam.filters.color import sepia, posterize

    sepia(buffer.view())
    posterize(buffer.view())
"""
import numpy as np

SEPIA_MATRIX = np.array([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
], dtype=np.float64)

POSTERIZE_LEVELS = 4

_TINT_CHANNELS = {'red': 0, 'green': 1, 'blue': 2}


def clamp_u8(values: np.ndarray) -> np.ndarray:
    """Round half to even and clamp to the 0-255 uint8 range."""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def check_rgba(image: np.ndarray) -> None:
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected RGBA image (H, W, 4), got shape {image.shape}")

    if image.dtype != np.uint8:
        raise ValueError(f"Expected uint8 dtype, got {image.dtype}")


def _scale(image: np.ndarray, factors: tuple[float, float, float]) -> np.ndarray:
    rgb = image[:, :, :3].astype(np.float64)
    image[:, :, :3] = clamp_u8(rgb * np.asarray(factors, dtype=np.float64))
    return image


# ============================================================================
# Grayscale / Invert
# ============================================================================

def grayscale(image: np.ndarray) -> np.ndarray:
    """Set R, G and B to their unweighted average.

    Args:
        image: RGBA uint8 array (H, W, 4), modified in place

    Returns:
        The same array with R=G=B
    """
    check_rgba(image)
    avg = image[:, :, :3].sum(axis=2, dtype=np.uint16) / 3.0
    image[:, :, :3] = clamp_u8(avg)[:, :, np.newaxis]
    return image


def invert(image: np.ndarray) -> np.ndarray:
    """Replace every color channel c by 255 - c."""
    check_rgba(image)
    np.subtract(255, image[:, :, :3], out=image[:, :, :3])
    return image


# ============================================================================
# Sepia / Vintage
# ============================================================================

def _sepia_rgb(image: np.ndarray) -> np.ndarray:
    rgb = image[:, :, :3].astype(np.float64)
    return clamp_u8(rgb @ SEPIA_MATRIX.T)


def sepia(image: np.ndarray) -> np.ndarray:
    """Apply the classic sepia channel-mixing matrix.

    R' = 0.393R + 0.769G + 0.189B
    G' = 0.349R + 0.686G + 0.168B
    B' = 0.272R + 0.534G + 0.131B

    Each output is capped at 255.
    """
    check_rgba(image)
    image[:, :, :3] = _sepia_rgb(image)
    return image


def vintage(image: np.ndarray) -> np.ndarray:
    """Sepia, then R and G boosted by 10% and B reduced by 10%."""
    check_rgba(image)
    image[:, :, :3] = _sepia_rgb(image)
    return _scale(image, (1.1, 1.1, 0.9))


# ============================================================================
# Channel tints
# ============================================================================

def tint(image: np.ndarray, channel: str) -> np.ndarray:
    """Boost one channel by 50% and halve the other two.

    Args:
        image: RGBA uint8 array (H, W, 4), modified in place
        channel: 'red', 'green' or 'blue'

    Returns:
        The same array
    """
    check_rgba(image)
    if channel not in _TINT_CHANNELS:
        raise ValueError(f"Unknown tint channel '{channel}'")
    factors = [0.5, 0.5, 0.5]
    factors[_TINT_CHANNELS[channel]] = 1.5
    return _scale(image, tuple(factors))


def red_tint(image: np.ndarray) -> np.ndarray:
    return tint(image, 'red')


def green_tint(image: np.ndarray) -> np.ndarray:
    return tint(image, 'green')


def blue_tint(image: np.ndarray) -> np.ndarray:
    return tint(image, 'blue')


# ============================================================================
# Neon / Posterize
# ============================================================================

def neon(image: np.ndarray, glow_threshold: int = 200) -> np.ndarray:
    """Brighten by 50%, then add a further 20% to pixels that glow.

    A pixel glows when any of its channels exceeds ``glow_threshold`` after
    the first brightening step.
    """
    check_rgba(image)
    bright = clamp_u8(image[:, :, :3].astype(np.float64) * 1.5)
    glowing = (bright > glow_threshold).any(axis=2)
    boosted = clamp_u8(bright.astype(np.float64) * 1.2)
    image[:, :, :3] = np.where(glowing[:, :, np.newaxis], boosted, bright)
    return image


def posterize(image: np.ndarray, levels: int = POSTERIZE_LEVELS) -> np.ndarray:
    """Quantize each channel to ``levels`` evenly spaced values.

    With the default of 4 levels every channel ends up in {0, 85, 170, 255}.
    Values are rounded half up to the nearest level.
    """
    check_rgba(image)
    levels = max(2, min(256, levels))
    step = 255 / (levels - 1)
    rgb = image[:, :, :3].astype(np.float64)
    image[:, :, :3] = clamp_u8(np.floor(rgb / step + 0.5) * step)
    return image


# ============================================================================
# Color temperature
# ============================================================================

def warm(image: np.ndarray) -> np.ndarray:
    """Red +20%, green +10%, blue -10%."""
    check_rgba(image)
    return _scale(image, (1.2, 1.1, 0.9))


def cool(image: np.ndarray) -> np.ndarray:
    """Red -10%, green +10%, blue +20%."""
    check_rgba(image)
    return _scale(image, (0.9, 1.1, 1.2))


__all__ = [
    'clamp_u8', 'check_rgba',
    'grayscale', 'invert',
    'sepia', 'vintage',
    'tint', 'red_tint', 'green_tint', 'blue_tint',
    'neon', 'posterize',
    'warm', 'cool',
    'SEPIA_MATRIX', 'POSTERIZE_LEVELS',
]
