"""Camera session.

CameraSession is the single owner of the state that the UI loop mutates:
the active filter, the filter history and the capture store. The UI calls
it on user actions, the frame loop calls :meth:`CameraSession.process_frame`
once per frame.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Callable

from filtercam import codec
from filtercam.buffer import PixelBuffer
from filtercam.captures import Capture, CaptureStore
from filtercam.config import Settings, settings as default_settings
from filtercam.errors import CodecError, EmptyCaptureStoreError
from filtercam.filters.catalog import FilterId
from filtercam.filters.engine import FilterEngine
from filtercam.history import FilterHistory
from filtercam.notifications import LoggingSink, NotificationKind, NotificationSink
from filtercam.storage import DirectoryStorage, KeyValueStorage

logger = logging.getLogger(__name__)

CAMERA_NOT_STARTED_MESSAGE = "Please start the camera first!"
CAPTURE_SUCCESS_MESSAGE = "Photo captured successfully!"
CAPTURE_FAILED_MESSAGE = "Error capturing photo"
NO_PHOTOS_MESSAGE = "No photos to download!"
DOWNLOAD_SUCCESS_MESSAGE = "Photo downloaded successfully!"
DOWNLOAD_FAILED_MESSAGE = "Error downloading photo"


class CameraSession:
    """Active filter, recent filters and captured photos of one camera view.

    :param engine: Filter engine, a default one if omitted
    :param history: Recent-filter log
    :param captures: Capture store, an in-memory one if omitted
    :param sink: Receives user notifications
    :param jpeg_quality: Quality of captured JPEGs
    :param clock: Returns the current time in epoch seconds
    """

    def __init__(
        self,
        engine: FilterEngine | None = None,
        history: FilterHistory | None = None,
        captures: CaptureStore | None = None,
        sink: NotificationSink | None = None,
        jpeg_quality: int = codec.DEFAULT_JPEG_QUALITY,
        clock: Callable[[], float] = time.time,
    ):
        self.sink = sink if sink is not None else LoggingSink()
        self.engine = engine if engine is not None else FilterEngine()
        self.history = history if history is not None else FilterHistory(clock=clock)
        self.captures = captures if captures is not None else CaptureStore(sink=self.sink)
        self.jpeg_quality = jpeg_quality
        self._clock = clock
        self._current_filter: FilterId | str = FilterId.NONE
        self._streaming = False

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        storage: KeyValueStorage | None = None,
        sink: NotificationSink | None = None,
    ) -> 'CameraSession':
        """Build a session from configuration, restoring saved captures.

        :param config: Settings, the module-level settings if omitted
        :param storage: Durable storage, a DirectoryStorage in
            ``config.STORAGE_DIR`` if omitted
        :param sink: Receives user notifications
        """
        config = config if config is not None else default_settings
        sink = sink if sink is not None else LoggingSink()
        if storage is None:
            storage = DirectoryStorage(config.STORAGE_DIR)
        captures = CaptureStore.load(
            storage,
            key=config.CAPTURE_STORAGE_KEY,
            sink=sink,
            max_captures=config.MAX_CAPTURES,
        )
        return cls(
            engine=FilterEngine(pixelate_block_size=config.PIXELATE_BLOCK_SIZE),
            history=FilterHistory(max_entries=config.MAX_HISTORY),
            captures=captures,
            sink=sink,
            jpeg_quality=config.JPEG_QUALITY,
        )

    # ---- Streaming ----

    @property
    def is_streaming(self) -> bool:
        return self._streaming

    def start(self) -> None:
        """Mark the camera as running."""
        if not self._streaming:
            self._streaming = True
            logger.info("Camera session started")

    def stop(self) -> None:
        """Mark the camera as stopped. The frame loop ends after its current frame."""
        if self._streaming:
            self._streaming = False
            logger.info("Camera session stopped")

    # ---- Filters ----

    @property
    def current_filter(self) -> FilterId | str:
        return self._current_filter

    def select_filter(self, filter_id: FilterId | str) -> None:
        """Make ``filter_id`` the active filter and record it as recently used.

        Unknown identifiers are accepted and act as no filter.
        """
        self._current_filter = FilterId.parse(filter_id) or filter_id
        self.history.record_selection(self._current_filter)
        logger.debug(f"Filter selected: {self._current_filter}")

    def process_frame(self, frame: PixelBuffer) -> PixelBuffer:
        """Apply the active filter to ``frame`` in place."""
        return self.engine.apply(frame, self._current_filter)

    # ---- Captures ----

    def capture(self, frame: PixelBuffer) -> Capture | None:
        """Filter a copy of ``frame``, encode it and add it to the captures.

        :param frame: The unfiltered camera frame; it is not modified
        :return: The new capture, or None if the camera is not running or
            encoding failed
        """
        if not self._streaming:
            self.sink.notify(CAMERA_NOT_STARTED_MESSAGE, NotificationKind.ERROR)
            return None

        still = frame.copy()
        if self._current_filter != FilterId.NONE:
            self.engine.apply(still, self._current_filter)

        try:
            image_data = codec.encode(still, "jpeg", quality=self.jpeg_quality)
        except CodecError as e:
            logger.error(f"Error capturing photo: {e}")
            self.sink.notify(CAPTURE_FAILED_MESSAGE, NotificationKind.ERROR)
            return None

        capture = Capture(
            image_data=image_data,
            timestamp=datetime.fromtimestamp(self._clock()).strftime("%X"),
            filter_applied=self._current_filter,
        )
        # Save failures are reported by the store itself
        self.captures.add(capture)
        self.sink.notify(CAPTURE_SUCCESS_MESSAGE, NotificationKind.SUCCESS)
        return capture

    def download_latest(self, directory: str | Path) -> Path | None:
        """Write the most recent capture to ``directory`` as ``photo_<ms>.jpg``.

        :return: The written file, or None if there is nothing to download or
            the file could not be written
        """
        try:
            latest = self.captures.require_latest()
        except EmptyCaptureStoreError:
            self.sink.notify(NO_PHOTOS_MESSAGE, NotificationKind.ERROR)
            return None

        target = Path(directory) / f"photo_{int(self._clock() * 1000)}.jpg"
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(latest.image_data)
        except OSError as e:
            logger.error(f"Error downloading photo to {target}: {e}")
            self.sink.notify(DOWNLOAD_FAILED_MESSAGE, NotificationKind.ERROR)
            return None

        self.sink.notify(DOWNLOAD_SUCCESS_MESSAGE, NotificationKind.SUCCESS)
        return target
