import threading

import cv2

from ..domain.service import FrameSource
from ..utils import get_logger

logger = get_logger(__name__)


class CameraFrameSource(FrameSource):
    """Frame source over an OpenCV capture device.

    The liveness monitor and the capture step read from different threads,
    so reads are serialised.
    """

    def __init__(self, source: int | str = 0, width: int | None = None, height: int | None = None):
        self.source = source
        self._lock = threading.Lock()
        self._stream = cv2.VideoCapture(source)
        if not self._stream.isOpened():
            self._stream.release()
            raise RuntimeError(f"Failed to open camera source {source!r}")
        if width:
            self._stream.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        if height:
            self._stream.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        logger.info("Camera %r opened", source)

    def read(self):
        with self._lock:
            ret, frame = self._stream.read()
        if not ret:
            logger.warning("Failed to read frame from camera %r", self.source)
            return None
        return frame

    def release(self) -> None:
        with self._lock:
            self._stream.release()
        logger.info("Camera %r released", self.source)
