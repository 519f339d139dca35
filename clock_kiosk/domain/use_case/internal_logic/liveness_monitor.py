import threading
from typing import Callable, Optional

from ...errors import UpstreamTimeout
from ...service import FrameSource, LandmarkExtractor, LivenessVerifier, UpstreamCaller
from ....utils import get_logger

logger = get_logger(__name__)


class LivenessMonitor:
    """Periodic frame-observation task bound to one liveness session.

    ``start`` always begins a fresh session. ``stop`` signals the loop, closes
    the session so it can never report live again and returns without
    waiting for the next tick.
    """

    def __init__(
        self,
        frame_source: FrameSource,
        landmark_extractor: LandmarkExtractor,
        upstream_caller: UpstreamCaller,
        verifier_factory: Callable[[], LivenessVerifier],
        interval: float = 0.1,
    ):
        self.frame_source = frame_source
        self.landmark_extractor = landmark_extractor
        self.upstream_caller = upstream_caller
        self.verifier_factory = verifier_factory
        self.interval = interval
        self._lock = threading.Lock()
        self._verifier: Optional[LivenessVerifier] = None
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def verifier(self) -> Optional[LivenessVerifier]:
        return self._verifier

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> LivenessVerifier:
        self.stop()
        with self._lock:
            verifier = self.verifier_factory()
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(verifier, stop_event),
                name="liveness-monitor",
                daemon=True,
            )
            self._verifier = verifier
            self._stop_event = stop_event
            self._thread = thread
        thread.start()
        logger.info("Liveness session %s started", verifier.session.session_id)
        return verifier

    def stop(self) -> None:
        with self._lock:
            verifier, stop_event, thread = self._verifier, self._stop_event, self._thread
            self._verifier = self._stop_event = self._thread = None

        if stop_event is not None:
            stop_event.set()
        if verifier is not None:
            verifier.close()
            logger.info("Liveness session %s closed", verifier.session.session_id)
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.interval)

    def renew(self) -> Optional[LivenessVerifier]:
        """Replace the current session if the camera is active."""
        if self._thread is None:
            return None
        return self.start()

    def _run(self, verifier: LivenessVerifier, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            self.poll_once(verifier)
            stop_event.wait(self.interval)

    def poll_once(self, verifier: LivenessVerifier) -> None:
        frame = self.frame_source.read()
        if frame is None:
            verifier.observe([])
            return
        try:
            detections = self.upstream_caller.call(
                "landmark extractor", self.landmark_extractor.predict, frame
            )
        except UpstreamTimeout:
            logger.warning("Skipping liveness frame, landmark extractor timed out")
            return
        except Exception as e:
            logger.error(f"Error in liveness detection: {e}")
            return
        verifier.observe([detection.landmarks for detection in detections])
