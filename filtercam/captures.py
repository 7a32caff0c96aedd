"""Captured still photos.

CaptureStore keeps the most recent filtered captures, newest first, and
persists the whole collection to durable storage on every change. The stored
form is a JSON array of ``{"data": <data URL>, "timestamp": str,
"filter": str}`` objects.

Persistence problems never escape the store: they are logged, reported to
the notification sink and the in-memory captures stay as they are.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterator

from filtercam import codec
from filtercam.errors import CodecError, EmptyCaptureStoreError, StorageError
from filtercam.filters.catalog import FilterId
from filtercam.notifications import NotificationKind, NotificationSink
from filtercam.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_MAX_CAPTURES = 5
DEFAULT_STORAGE_KEY = "capturedPhotos"

SAVE_ERROR_MESSAGE = "Error saving photos to storage"
LOAD_ERROR_MESSAGE = "Error loading saved photos"


@dataclass(frozen=True)
class Capture:
    """A filtered still image and its metadata."""

    image_data: bytes
    timestamp: str
    filter_applied: FilterId | str
    mime_type: str = "image/jpeg"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary form."""
        return {
            'data': codec.to_data_url(self.image_data, self.mime_type),
            'timestamp': self.timestamp,
            'filter': str(self.filter_applied),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Capture':
        """Create from the persisted dictionary form."""
        if not isinstance(data, dict):
            raise ValueError(f"Expected a capture object, got {type(data).__name__}")
        image_data, mime_type = codec.from_data_url(data['data'])
        filter_name = data.get('filter', FilterId.NONE.value)
        return cls(
            image_data=image_data,
            timestamp=str(data.get('timestamp', '')),
            filter_applied=FilterId.parse(filter_name) or filter_name,
            mime_type=mime_type,
        )


class CaptureStore:
    """Bounded, most-recent-first collection of captures.

    :param max_captures: Capacity; the oldest capture is dropped beyond it
    :param storage: Durable storage to persist to, None to keep captures in
        memory only
    :param key: Storage key of the serialized collection
    :param sink: Receives error notifications for persistence failures
    """

    def __init__(
        self,
        max_captures: int = DEFAULT_MAX_CAPTURES,
        storage: KeyValueStorage | None = None,
        key: str = DEFAULT_STORAGE_KEY,
        sink: NotificationSink | None = None,
    ):
        if max_captures < 1:
            raise ValueError(f"max_captures must be at least 1, got {max_captures}")
        self._max_captures = max_captures
        self._storage = storage
        self._key = key
        self._sink = sink
        self._captures: list[Capture] = []

    @classmethod
    def load(
        cls,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
        sink: NotificationSink | None = None,
        max_captures: int = DEFAULT_MAX_CAPTURES,
    ) -> 'CaptureStore':
        """Create a store and fill it from ``storage`` if a saved copy exists.

        A missing key gives an empty store. An unreadable or corrupt saved
        copy also gives an empty store and an error notification.
        """
        store = cls(max_captures=max_captures, storage=storage, key=key, sink=sink)
        try:
            raw = storage.get(key)
            if raw is None:
                return store
            entries = json.loads(raw.decode('utf-8'))
            if not isinstance(entries, list):
                raise ValueError(f"Expected a JSON array, got {type(entries).__name__}")
            captures = [Capture.from_dict(entry) for entry in entries]
        except (StorageError, CodecError, ValueError, TypeError, KeyError) as e:
            logger.error(f"Error loading photos from storage: {e}")
            store._report(LOAD_ERROR_MESSAGE)
            return store
        store._captures = captures[:max_captures]
        logger.info(f"Loaded {len(store._captures)} saved photos")
        return store

    @property
    def max_captures(self) -> int:
        return self._max_captures

    def add(self, capture: Capture) -> bool:
        """Insert ``capture`` at the front, evicting the oldest beyond capacity.

        :return: True if the collection was persisted (or no storage is
            configured), False if saving failed
        """
        self._captures.insert(0, capture)
        del self._captures[self._max_captures:]
        return self.save()

    def all(self) -> list[Capture]:
        """Captures, most recent first."""
        return list(self._captures)

    def latest(self) -> Capture | None:
        """The most recent capture, or None if there is none."""
        return self._captures[0] if self._captures else None

    def require_latest(self) -> Capture:
        """The most recent capture. Raises EmptyCaptureStoreError if empty."""
        latest = self.latest()
        if latest is None:
            raise EmptyCaptureStoreError("No photos to download!")
        return latest

    def clear(self) -> bool:
        """Remove all captures and persist the empty collection."""
        self._captures.clear()
        return self.save()

    def save(self) -> bool:
        """Serialize the whole collection to storage.

        :return: False if serialization or the storage write failed
        """
        if self._storage is None:
            return True
        try:
            payload = json.dumps([capture.to_dict() for capture in self._captures])
            self._storage.set(self._key, payload.encode('utf-8'))
        except (StorageError, CodecError, TypeError, ValueError) as e:
            logger.error(f"Error saving photos to storage: {e}")
            self._report(SAVE_ERROR_MESSAGE)
            return False
        return True

    def _report(self, message: str) -> None:
        if self._sink is not None:
            self._sink.notify(message, NotificationKind.ERROR)

    def __len__(self) -> int:
        return len(self._captures)

    def __iter__(self) -> Iterator[Capture]:
        return iter(list(self._captures))
