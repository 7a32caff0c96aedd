# filtercam Filters - Catalog
"""
Closed set of filter identifiers and their display names.

The catalog is a pure lookup table: it maps each :class:`FilterId` to the
name shown in the filter selector and the recent-filters list. Identifiers
arriving from the outside world are plain strings; :meth:`FilterId.parse`
turns them into a member or ``None`` for anything outside the set.
"""

from __future__ import annotations

from enum import Enum


class FilterId(str, Enum):
    """Identifier of a selectable filter."""

    NONE = "none"
    GRAYSCALE = "grayscale"
    SEPIA = "sepia"
    INVERT = "invert"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    VINTAGE = "vintage"
    BLUR = "blur"
    PIXELATE = "pixelate"
    MIRROR = "mirror"
    NEON = "neon"
    RAINBOW = "rainbow"
    POSTERIZE = "posterize"
    EMBOSS = "emboss"
    SKETCH = "sketch"
    WARM = "warm"
    COOL = "cool"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "FilterId | str | None") -> "FilterId | None":
        """Get the member for ``value``, or None if it is not a known filter."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]


# Selector order
DISPLAY_NAMES: dict[FilterId, str] = {
    FilterId.NONE: "No Filter",
    FilterId.GRAYSCALE: "Grayscale",
    FilterId.SEPIA: "Sepia",
    FilterId.INVERT: "Invert",
    FilterId.RED: "Red Tint",
    FilterId.BLUE: "Blue Tint",
    FilterId.GREEN: "Green Tint",
    FilterId.VINTAGE: "Vintage",
    FilterId.BLUR: "Blur",
    FilterId.PIXELATE: "Pixelate",
    FilterId.MIRROR: "Mirror",
    FilterId.NEON: "Neon Glow",
    FilterId.RAINBOW: "Rainbow",
    FilterId.POSTERIZE: "Posterize",
    FilterId.EMBOSS: "Emboss",
    FilterId.SKETCH: "Sketch",
    FilterId.WARM: "Warm Tone",
    FilterId.COOL: "Cool Tone",
}

# Filters that read neighbouring or relocated pixels and need a snapshot
SNAPSHOT_FILTERS: frozenset[FilterId] = frozenset({
    FilterId.MIRROR,
    FilterId.BLUR,
    FilterId.EMBOSS,
    FilterId.SKETCH,
})


def display_name(filter_id: FilterId | str) -> str:
    """Human readable name, falling back to the raw identifier."""
    member = FilterId.parse(filter_id)
    if member is None:
        return str(filter_id)
    return DISPLAY_NAMES[member]


def all_ids() -> list[FilterId]:
    """All filter identifiers in selector order."""
    return list(DISPLAY_NAMES)


__all__ = [
    'FilterId',
    'DISPLAY_NAMES',
    'SNAPSHOT_FILTERS',
    'display_name',
    'all_ids',
]
