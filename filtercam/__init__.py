"""
filtercam - Live-video pixel filters for RGBA frame buffers
"""

from .buffer import PixelBuffer
from .errors import FilterCamError, StorageError, CodecError, EmptyCaptureStoreError
from .filters import FilterId, FilterEngine, display_name, all_ids
from .history import FilterHistory, FilterHistoryEntry, age_label
from .captures import Capture, CaptureStore
from .storage import KeyValueStorage, MemoryStorage, DirectoryStorage
from .notifications import (
    Notification,
    NotificationKind,
    NotificationSink,
    LoggingSink,
    CollectingSink,
)
from .session import CameraSession

__all__ = [
    # Pixel data
    "PixelBuffer",
    # Filters
    "FilterId",
    "FilterEngine",
    "display_name",
    "all_ids",
    # History and captures
    "FilterHistory",
    "FilterHistoryEntry",
    "age_label",
    "Capture",
    "CaptureStore",
    # Storage
    "KeyValueStorage",
    "MemoryStorage",
    "DirectoryStorage",
    # Notifications
    "Notification",
    "NotificationKind",
    "NotificationSink",
    "LoggingSink",
    "CollectingSink",
    # Session
    "CameraSession",
    # Errors
    "FilterCamError",
    "StorageError",
    "CodecError",
    "EmptyCaptureStoreError",
]

__version__ = "0.1.0"
