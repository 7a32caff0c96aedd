"""Recently used filters.

FilterHistory keeps a short, recency-ordered log of filter selections that
drives the "recent filters" list. Re-selecting a filter moves it to the
front instead of adding a duplicate.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Iterator

from filtercam.filters.catalog import FilterId, display_name

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 5


@dataclass(frozen=True)
class FilterHistoryEntry:
    """A single filter selection."""

    name: FilterId | str
    applied_at: float  # Epoch seconds

    @property
    def display_name(self) -> str:
        return display_name(self.name)


def age_label(entry: FilterHistoryEntry, now: float) -> str:
    """Describe how long ago ``entry`` was recorded.

    :param entry: The history entry
    :param now: Current time in epoch seconds
    :return: "just now", "1 min ago", "N mins ago", "1 hour ago" or "N hours ago"
    """
    seconds = math.floor(now - entry.applied_at)
    if seconds < 60:
        return "just now"
    if seconds < 120:
        return "1 min ago"
    if seconds < 3600:
        return f"{seconds // 60} mins ago"
    if seconds < 7200:
        return "1 hour ago"
    return f"{seconds // 3600} hours ago"


class FilterHistory:
    """Bounded, most-recent-first log of filter selections.

    :param max_entries: Capacity; the oldest entry is dropped beyond it
    :param clock: Returns the current time in epoch seconds
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ):
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._max_entries = max_entries
        self._clock = clock
        self._entries: list[FilterHistoryEntry] = []

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def record_selection(self, filter_id: FilterId | str) -> FilterHistoryEntry:
        """Record that ``filter_id`` was selected just now.

        Known identifiers are stored as :class:`FilterId`, anything else as
        the raw string.
        """
        name = FilterId.parse(filter_id) or filter_id
        self._entries = [entry for entry in self._entries if entry.name != name]
        entry = FilterHistoryEntry(name=name, applied_at=self._clock())
        self._entries.insert(0, entry)
        del self._entries[self._max_entries:]
        logger.debug(f"Recorded filter selection '{name}'")
        return entry

    def recent(self) -> list[FilterHistoryEntry]:
        """Entries, most recent first."""
        return list(self._entries)

    def labels(self, now: float | None = None) -> list[tuple[str, str]]:
        """(display name, age label) pairs for the recent-filters view."""
        if now is None:
            now = self._clock()
        return [(entry.display_name, age_label(entry, now)) for entry in self._entries]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FilterHistoryEntry]:
        return iter(list(self._entries))
