"""Frame sources and the frame-processing loop.

Streams:
- FrameStream: Base class with lifecycle and frame tracking
- StillStream: Repeats a single image
- SequenceStream: Plays a finite list of frames
- GeneratorStream: Procedural frame generation

FrameLoop processes one frame at a time from any stream.
"""

from .base import FrameStream
from .still import StillStream, SequenceStream
from .generator import GeneratorStream
from .loop import FrameLoop

__all__ = [
    "FrameStream",
    "StillStream",
    "SequenceStream",
    "GeneratorStream",
    "FrameLoop",
]
