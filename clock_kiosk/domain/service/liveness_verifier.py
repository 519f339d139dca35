import threading
import time
from typing import Callable, Sequence

from ..model import FaceLandmarks, LivenessSession
from ...settings import KioskSettings
from ...utils import eye_aspect_ratio, get_logger, point_distance

logger = get_logger(__name__)


class LivenessVerifier:
    """Accumulates blink and head-movement evidence for one camera activation.

    Each piece of evidence is timestamped. Evidence older than
    ``timeout_seconds`` is stale and has to be gathered again, so a camera
    left running with nobody in front of it still verifies the next person.

    Frames are fed through ``observe`` from the monitor thread while the
    kiosk thread asks ``is_live`` at capture time, so the session is guarded
    by a lock. A closed verifier never reports live again.
    """

    def __init__(
        self,
        ear_closed_threshold: float,
        blink_consecutive_frames: int,
        movement_pixel_threshold: float,
        timeout_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ear_closed_threshold = ear_closed_threshold
        self.blink_consecutive_frames = blink_consecutive_frames
        self.movement_pixel_threshold = movement_pixel_threshold
        self.timeout_seconds = timeout_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self.session = LivenessSession(started_at=clock())

    @classmethod
    def from_settings(
        cls, settings: KioskSettings, clock: Callable[[], float] = time.monotonic
    ) -> "LivenessVerifier":
        return cls(
            ear_closed_threshold=settings.ear_closed_threshold,
            blink_consecutive_frames=settings.blink_consecutive_frames,
            movement_pixel_threshold=settings.movement_pixel_threshold,
            timeout_seconds=settings.liveness_timeout_seconds,
            clock=clock,
        )

    def observe(self, faces: Sequence[FaceLandmarks]) -> None:
        with self._lock:
            session = self.session
            if session.closed:
                return

            session.frames_observed += 1
            session.face_count = len(faces)

            if session.face_count != 1:
                # evidence has to come from one continuous subject
                session.previous_landmarks = None
                session.closed_eye_frames = 0
                return

            self._drop_stale(session)
            landmarks = faces[0]
            self._track_blink(session, landmarks)
            self._track_movement(session, landmarks)
            session.previous_landmarks = landmarks

    def _track_blink(self, session: LivenessSession, landmarks: FaceLandmarks) -> None:
        ratio = (
            eye_aspect_ratio(landmarks.left_eye) + eye_aspect_ratio(landmarks.right_eye)
        ) / 2.0

        if ratio < self.ear_closed_threshold:
            session.closed_eye_frames += 1
            return

        if session.closed_eye_frames >= self.blink_consecutive_frames:
            if not session.blink_detected:
                logger.info(
                    "Blink detected in session %s after %d closed frames",
                    session.session_id,
                    session.closed_eye_frames,
                )
            session.blink_detected = True
            session.blink_at = self._clock()
        session.closed_eye_frames = 0

    def _track_movement(self, session: LivenessSession, landmarks: FaceLandmarks) -> None:
        if session.previous_landmarks is None:
            return
        displacement = point_distance(landmarks.nose_tip, session.previous_landmarks.nose_tip)
        if displacement > self.movement_pixel_threshold:
            if not session.movement_detected:
                logger.info(
                    "Head movement detected in session %s (%.2f px)",
                    session.session_id,
                    displacement,
                )
            session.movement_detected = True
            session.movement_at = self._clock()

    def _is_stale(self, gathered_at: float | None) -> bool:
        if not self.timeout_seconds or gathered_at is None:
            return False
        return self._clock() - gathered_at > self.timeout_seconds

    def _drop_stale(self, session: LivenessSession) -> None:
        if self._is_stale(session.blink_at):
            session.blink_detected = False
            session.blink_at = None
        if self._is_stale(session.movement_at):
            session.movement_detected = False
            session.movement_at = None

    @property
    def expired(self) -> bool:
        """True when some of the gathered evidence is older than the timeout."""
        return self._is_stale(self.session.blink_at) or self._is_stale(self.session.movement_at)

    def is_live(self) -> bool:
        with self._lock:
            session = self.session
            return (
                not session.closed
                and not self.expired
                and session.face_count == 1
                and session.blink_detected
                and session.movement_detected
            )

    def instruction(self) -> str | None:
        """User-facing hint for whatever currently blocks liveness."""
        with self._lock:
            session = self.session
            if session.closed:
                return "Restart the camera to verify again"
            if session.face_count == 0:
                return "Look directly at the camera"
            if session.face_count > 1:
                return "Only one person may be in front of the camera"
            if not session.blink_detected or self._is_stale(session.blink_at):
                return "Please blink"
            if not session.movement_detected or self._is_stale(session.movement_at):
                return "Move your head slightly"
            return None

    def close(self) -> None:
        with self._lock:
            self.session.closed = True
            self.session.previous_landmarks = None
