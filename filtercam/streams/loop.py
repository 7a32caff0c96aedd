"""Cooperative frame-processing loop.

FrameLoop pulls one frame at a time from a stream, filters it through the
session and hands the result to a display callback. The next frame is only
requested after the previous one has been fully processed, so exactly one
frame is in flight and the buffer can be reused safely.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from filtercam.buffer import PixelBuffer
from .base import FrameStream

if TYPE_CHECKING:
    from filtercam.session import CameraSession

logger = logging.getLogger(__name__)


class FrameLoop:
    """Drives ``stream -> session.process_frame -> on_frame`` one frame at a time.

    :param stream: Frame source
    :param session: Applies the active filter to each frame
    :param on_frame: Receives every filtered frame, e.g. to display it
    :param idle_interval: Seconds to wait before polling again when the
        stream had no new frame
    """

    def __init__(
        self,
        stream: FrameStream,
        session: "CameraSession",
        on_frame: Callable[[PixelBuffer], None] | None = None,
        idle_interval: float = 0.005,
    ) -> None:
        self.stream = stream
        self.session = session
        self.on_frame = on_frame
        self.idle_interval = idle_interval
        self.frames_processed: int = 0
        self.last_frame_seconds: float = 0.0
        self._last_index: int = -1
        self._stopped: bool = False

    @property
    def is_active(self) -> bool:
        """Whether the loop may request another frame."""
        return (
            not self._stopped
            and self.stream.is_running
            and self.session.is_streaming
        )

    def stop(self) -> None:
        """End the loop after the frame currently being processed."""
        self._stopped = True

    def step(self) -> PixelBuffer | None:
        """Process at most one frame.

        :return: The filtered frame, or None if no new frame was available
        """
        if not self.is_active:
            return None
        frame, index = self.stream.get_frame(self.stream.elapsed_time)
        if frame is None or index == self._last_index:
            return None
        self._last_index = index

        start = time.perf_counter()
        self.session.process_frame(frame)
        self.last_frame_seconds = time.perf_counter() - start
        self.frames_processed += 1

        if self.on_frame is not None:
            self.on_frame(frame)
        return frame

    def run(self, max_frames: int | None = None) -> int:
        """Process frames until the stream or session stops or the limit is hit.

        Polls where the stream has nothing new, e.g. while paused or when a
        generator skips a frame.

        :param max_frames: Maximum number of frames to process, None for no limit
        :return: Number of frames processed by this call
        """
        self._stopped = False
        processed = 0
        while self.is_active and (max_frames is None or processed < max_frames):
            if self.step() is None:
                time.sleep(self.idle_interval)
                continue
            processed += 1
        logger.debug(
            f"Frame loop processed {processed} frames "
            f"(last frame {self.last_frame_seconds * 1000:.2f} ms)"
        )
        return processed
