# filtercam Filters - Engine
"""
Dispatch from a :class:`FilterId` to its pixel transform.

The engine owns no pixel data. ``FilterEngine.apply`` borrows a
:class:`PixelBuffer`, runs the transform registered for the identifier on
the buffer's RGBA view and returns the same buffer. Unknown identifiers are
treated as the identity filter, and no input ever raises.

Transforms are registered with the :func:`register_transform` decorator.
The table is checked when this module is imported so every member of
:class:`FilterId` has exactly one transform.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from filtercam.buffer import PixelBuffer
from .catalog import FilterId
from . import color, spatial

logger = logging.getLogger(__name__)

# A transform modifies an (H, W, 4) uint8 array in place
Transform = Callable[[np.ndarray], np.ndarray]

TRANSFORM_REGISTRY: dict[FilterId, Transform] = {}


def register_transform(filter_id: FilterId) -> Callable[[Transform], Transform]:
    """Decorator to register the transform for a filter identifier."""
    def decorator(func: Transform) -> Transform:
        if filter_id in TRANSFORM_REGISTRY:
            raise ValueError(f"Transform for '{filter_id}' already registered")
        TRANSFORM_REGISTRY[filter_id] = func
        return func
    return decorator


def _identity(image: np.ndarray) -> np.ndarray:
    return image


register_transform(FilterId.NONE)(_identity)
register_transform(FilterId.GRAYSCALE)(color.grayscale)
register_transform(FilterId.INVERT)(color.invert)
register_transform(FilterId.SEPIA)(color.sepia)
register_transform(FilterId.RED)(color.red_tint)
register_transform(FilterId.GREEN)(color.green_tint)
register_transform(FilterId.BLUE)(color.blue_tint)
register_transform(FilterId.VINTAGE)(color.vintage)
register_transform(FilterId.NEON)(color.neon)
register_transform(FilterId.POSTERIZE)(color.posterize)
register_transform(FilterId.WARM)(color.warm)
register_transform(FilterId.COOL)(color.cool)
register_transform(FilterId.PIXELATE)(spatial.pixelate)
register_transform(FilterId.MIRROR)(spatial.mirror)
register_transform(FilterId.BLUR)(spatial.blur)
register_transform(FilterId.EMBOSS)(spatial.emboss)
register_transform(FilterId.SKETCH)(spatial.sketch)
register_transform(FilterId.RAINBOW)(spatial.rainbow)

_missing = set(FilterId) - set(TRANSFORM_REGISTRY)
if _missing:
    raise RuntimeError(f"No transform registered for: {sorted(m.value for m in _missing)}")


class FilterEngine:
    """Applies filters to pixel buffers in place.

    :param pixelate_block_size: Tile size used by the pixelate filter
    """

    def __init__(self, pixelate_block_size: int = spatial.PIXELATE_BLOCK_SIZE):
        self.pixelate_block_size = pixelate_block_size
        self._transforms: dict[FilterId, Transform] = dict(TRANSFORM_REGISTRY)
        if pixelate_block_size != spatial.PIXELATE_BLOCK_SIZE:
            self._transforms[FilterId.PIXELATE] = (
                lambda image: spatial.pixelate(image, pixelate_block_size)
            )

    def supports(self, filter_id: FilterId | str) -> bool:
        """Whether ``filter_id`` names a known filter."""
        return FilterId.parse(filter_id) is not None

    def transform_for(self, filter_id: FilterId | str) -> Transform:
        """The transform for ``filter_id``; identity for unknown identifiers."""
        member = FilterId.parse(filter_id)
        if member is None:
            return _identity
        return self._transforms[member]

    def apply(self, buffer: PixelBuffer, filter_id: FilterId | str) -> PixelBuffer:
        """Apply a filter to ``buffer`` in place.

        :param buffer: The frame to transform. Width, height and size are kept.
        :param filter_id: Filter to apply. Unknown values leave the buffer unchanged.
        :return: The same buffer, for chaining
        """
        member = FilterId.parse(filter_id)
        if member is None:
            logger.debug(f"Ignoring unknown filter '{filter_id}'")
            return buffer
        if member is FilterId.NONE or len(buffer) == 0:
            return buffer
        self._transforms[member](buffer.view())
        return buffer


__all__ = [
    'FilterEngine',
    'Transform',
    'TRANSFORM_REGISTRY',
    'register_transform',
]
