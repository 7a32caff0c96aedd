"""Streams backed by images that are already in memory.

- StillStream repeats a single image, e.g. a captured still or a test card
- SequenceStream plays a finite list of frames and then stops
"""

from __future__ import annotations

from typing import Iterable

from filtercam.buffer import PixelBuffer
from .base import FrameStream


class StillStream(FrameStream):
    """Endless stream of copies of one image.

    Every frame is a fresh copy, so filtering a frame in place never alters
    the source image or later frames.

    :param image: The image to repeat
    """

    def __init__(self, image: PixelBuffer) -> None:
        super().__init__()
        self._image = image.copy()

    @property
    def image(self) -> PixelBuffer:
        return self._image

    def get_frame(self, timestamp: float) -> tuple[PixelBuffer | None, int]:
        if not self._running or self._paused:
            return (None, self._frame_index)
        frame = self._image.copy()
        return (frame, self._store_frame(frame))


class SequenceStream(FrameStream):
    """Finite stream that yields each frame once and stops after the last.

    :param frames: Frames to play in order. They are handed out as they are,
        so the caller gets the filtered result back in its own objects.
    """

    def __init__(self, frames: Iterable[PixelBuffer]) -> None:
        super().__init__()
        self._frames = list(frames)
        self._position = 0

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def start(self) -> None:
        if not self._running:
            self._position = 0
        super().start()

    def get_frame(self, timestamp: float) -> tuple[PixelBuffer | None, int]:
        if not self._running or self._paused:
            return (None, self._frame_index)
        if self._position >= len(self._frames):
            self.stop()
            return (None, self._frame_index)
        frame = self._frames[self._position]
        self._position += 1
        index = self._store_frame(frame)
        if self._position >= len(self._frames):
            self.stop()
        return (frame, index)
