"""Durable key-value byte storage.

The capture store persists itself through this small interface so it can be
backed by memory in tests and by a directory on disk in the application.

Backends raise :class:`~filtercam.errors.StorageError` when a write cannot
be completed. Callers decide how to report it.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from filtercam.errors import StorageError

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r'^[A-Za-z0-9_.-]+$')


@runtime_checkable
class KeyValueStorage(Protocol):
    """Byte store addressed by string keys."""

    def get(self, key: str) -> bytes | None:
        """Get the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``. Raises StorageError on failure."""
        ...

    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""
        ...


class MemoryStorage:
    """In-memory storage with an optional total size quota.

    :param quota_bytes: Maximum total size of all values, None for unlimited.
        Writes that would exceed it fail like a full browser storage.
    """

    def __init__(self, quota_bytes: int | None = None):
        self._data: dict[str, bytes] = {}
        self._quota = quota_bytes

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise StorageError(key, f"expected bytes, got {type(value).__name__}")
        if self._quota is not None:
            used = sum(len(v) for k, v in self._data.items() if k != key)
            if used + len(value) > self._quota:
                raise StorageError(key, f"quota of {self._quota} bytes exceeded")
        self._data[key] = bytes(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class DirectoryStorage:
    """One file per key inside a directory.

    Writes go to a temporary file that replaces the target, so a failed
    write never leaves a truncated value behind.

    :param directory: Storage directory, created on first write
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(key, "key contains unsupported characters")
        return self.directory / key

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(key, str(e)) from e

    def set(self, key: str, value: bytes) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(key, str(e)) from e
        logger.debug(f"Stored {len(value)} bytes under '{key}' in {self.directory}")

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(key, str(e)) from e
