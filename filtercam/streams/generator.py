"""Generator stream implementation.

This module provides GeneratorStream for procedural/on-demand frame generation.
"""

from __future__ import annotations

from typing import Callable

from filtercam.buffer import PixelBuffer
from .base import FrameStream


class GeneratorStream(FrameStream):
    """On-demand frame generation via subclassing or callback.

    Preferred usage: Subclass and override the `render()` method to generate
    frames. Alternatively, pass a handler callback for simple cases.

    The render method (or handler) receives a timestamp and returns a
    PixelBuffer, or None to skip the frame.

    Example (class-based):
        class GradientStream(GeneratorStream):
            def __init__(self, width: int, height: int):
                super().__init__()
                self.width = width
                self.height = height

            def render(self, timestamp: float) -> PixelBuffer:
                return make_gradient(self.width, self.height, timestamp)

    Example (callback-based):
        stream = GeneratorStream(lambda t: PixelBuffer.blank(64, 48))
    """

    def __init__(
        self,
        handler: Callable[[float], PixelBuffer | None] | None = None,
    ) -> None:
        """Initialize generator stream.

        :param handler: Optional callable that takes a timestamp and returns a
            frame. If not provided, override the render() method instead.
        """
        super().__init__()
        self._handler = handler

    def render(self, timestamp: float) -> PixelBuffer | None:
        """Generate a frame for the given timestamp.

        The default implementation calls the handler callback if provided.

        :param timestamp: Current playback time in seconds
        :return: PixelBuffer or None
        """
        if self._handler is not None:
            return self._handler(timestamp)
        return None

    def get_frame(self, timestamp: float) -> tuple[PixelBuffer | None, int]:
        """Call render() to generate a frame.

        :param timestamp: Current playback time in seconds
        :return: Tuple of (frame, frame_index)
        """
        if not self._running or self._paused:
            return (None, self._frame_index)

        frame = self.render(timestamp)
        if frame is None:
            return (None, self._frame_index)
        return (frame, self._store_frame(frame))
