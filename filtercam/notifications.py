"""User-facing notifications.

The core reports outcomes of capture, save, load and download actions as
``(message, kind)`` events. Rendering them is up to the UI; the sinks here
either log them or collect them for polling and tests.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    """Severity of a notification."""
    SUCCESS = "success"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Notification:
    """A message for the user."""

    message: str
    kind: NotificationKind = NotificationKind.SUCCESS
    created_at: float = field(default_factory=time.time)


@runtime_checkable
class NotificationSink(Protocol):
    """Receives notifications."""

    def notify(self, message: str, kind: NotificationKind = NotificationKind.SUCCESS) -> None:
        ...


class LoggingSink:
    """Writes notifications to the log."""

    def notify(self, message: str, kind: NotificationKind = NotificationKind.SUCCESS) -> None:
        if kind == NotificationKind.ERROR:
            logger.warning(message)
        else:
            logger.info(message)


class CollectingSink:
    """Keeps the most recent notifications in memory.

    :param max_items: Number of notifications to keep
    """

    def __init__(self, max_items: int = 100):
        self._items: deque[Notification] = deque(maxlen=max_items)

    def notify(self, message: str, kind: NotificationKind = NotificationKind.SUCCESS) -> None:
        self._items.append(Notification(message, NotificationKind(kind)))

    @property
    def notifications(self) -> list[Notification]:
        return list(self._items)

    @property
    def messages(self) -> list[str]:
        return [item.message for item in self._items]

    @property
    def last(self) -> Notification | None:
        return self._items[-1] if self._items else None

    def errors(self) -> list[Notification]:
        return [item for item in self._items if item.kind == NotificationKind.ERROR]

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
