"""Frame source base class.

A FrameStream hands out RGBA frames on request and numbers them, so a
consumer polling it can tell a fresh frame from one it has already seen.
Streams never filter; that is the job of the session the frame loop feeds.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from filtercam.buffer import PixelBuffer


class FrameStream(ABC):
    """Base class for frame sources with start/stop and pause/resume.

    Subclasses implement :meth:`get_frame` and call :meth:`_store_frame`
    for every frame they produce.

    Example:
        class NoiseStream(FrameStream):
            def get_frame(self, timestamp):
                if not self.is_running or self.is_paused:
                    return (None, self.frame_index)
                frame = make_noise(640, 480)
                return (frame, self._store_frame(frame))
    """

    def __init__(self) -> None:
        self._running: bool = False
        self._paused: bool = False
        # perf_counter bookkeeping for elapsed_time
        self._started_at: float = 0.0
        self._paused_at: float = 0.0
        self._paused_total: float = 0.0

        self._frame_index: int = 0
        self._last_frame: PixelBuffer | None = None

    @abstractmethod
    def get_frame(self, timestamp: float) -> tuple[PixelBuffer | None, int]:
        """Request the frame for ``timestamp``.

        :param timestamp: Seconds since the stream started
        :return: ``(frame, new_index)`` when a frame is available, otherwise
            ``(None, current_index)``. The caller may modify the frame in
            place until it requests the next one.
        """
        ...

    # ---- Lifecycle ----

    def start(self) -> None:
        """Start producing frames. Does nothing if already running."""
        if self._running:
            return
        self._running = True
        self._paused = False
        self._started_at = time.perf_counter()
        self._paused_at = 0.0
        self._paused_total = 0.0

    def stop(self) -> None:
        self._running = False
        self._paused = False

    def pause(self) -> None:
        """Stop handing out frames until :meth:`resume` is called."""
        if self._running and not self._paused:
            self._paused = True
            self._paused_at = time.perf_counter()

    def resume(self) -> None:
        if self._paused:
            self._paused_total += time.perf_counter() - self._paused_at
            self._paused_at = 0.0
            self._paused = False

    # ---- State ----

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def elapsed_time(self) -> float:
        """Running time in seconds, not counting pauses."""
        if self._started_at == 0.0:
            return 0.0
        now = self._paused_at if self._paused else time.perf_counter()
        return now - self._started_at - self._paused_total

    @property
    def frame_index(self) -> int:
        """Index of the last frame produced, 0 before the first one."""
        return self._frame_index

    @property
    def frame_count(self) -> int:
        """Number of frames in a finite stream, 0 for endless streams."""
        return 0

    @property
    def last_frame(self) -> PixelBuffer | None:
        return self._last_frame

    def _store_frame(self, frame: PixelBuffer) -> int:
        """Remember ``frame`` as the latest one and return its new index."""
        self._frame_index += 1
        self._last_frame = frame
        return self._frame_index
