# filtercam Filters Module
"""
Per-frame pixel filters.

Filters are plain functions over RGBA uint8 arrays that transform the array
in place. :class:`FilterEngine` maps a :class:`FilterId` to its function and
applies it to a :class:`~filtercam.buffer.PixelBuffer`.
"""

from .catalog import (
    FilterId,
    DISPLAY_NAMES,
    SNAPSHOT_FILTERS,
    display_name,
    all_ids,
)

from .color import (
    grayscale,
    invert,
    sepia,
    vintage,
    tint,
    neon,
    posterize,
    warm,
    cool,
)

from .spatial import (
    pixelate,
    mirror,
    blur,
    emboss,
    sketch,
    rainbow,
)

from .engine import (
    FilterEngine,
    TRANSFORM_REGISTRY,
    register_transform,
)

__all__ = [
    # Catalog
    'FilterId',
    'DISPLAY_NAMES',
    'SNAPSHOT_FILTERS',
    'display_name',
    'all_ids',
    # Color
    'grayscale',
    'invert',
    'sepia',
    'vintage',
    'tint',
    'neon',
    'posterize',
    'warm',
    'cool',
    # Spatial
    'pixelate',
    'mirror',
    'blur',
    'emboss',
    'sketch',
    'rainbow',
    # Engine
    'FilterEngine',
    'TRANSFORM_REGISTRY',
    'register_transform',
]
