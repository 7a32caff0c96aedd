"""Exception types raised by filtercam.

Filters never raise. These errors cover the boundaries around the filter
core: durable storage, image encoding and exporting captures.
"""


class FilterCamError(Exception):
    """Base class for all filtercam errors."""


class StorageError(FilterCamError):
    """Reading from or writing to durable storage failed."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Storage operation on '{key}' failed: {reason}")
        self.key = key
        self.reason = reason


class CodecError(FilterCamError):
    """An image could not be encoded or decoded."""


class EmptyCaptureStoreError(FilterCamError):
    """An export was requested but no capture exists."""
