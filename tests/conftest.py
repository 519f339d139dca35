import threading

import pytest

from clock_kiosk.di import InMemoryRepository, Service
from clock_kiosk.domain.factory import KioskFactory
from clock_kiosk.domain.model import CapturedSample, EnrolledIdentity, FaceDetection, FaceLandmarks
from clock_kiosk.domain.service import FrameSource, LandmarkExtractor, LivenessVerifier
from clock_kiosk.settings import KioskSettings

DIMENSION = 4


def eye(open_eye: bool = True, x: float = 0.0):
    lid = 2.0 if open_eye else 0.3
    return (
        (x, 0.0),
        (x + 2.0, -lid),
        (x + 4.0, -lid),
        (x + 6.0, 0.0),
        (x + 4.0, lid),
        (x + 2.0, lid),
    )


def make_landmarks(open_eyes: bool = True, nose=(50.0, 50.0)) -> FaceLandmarks:
    return FaceLandmarks(
        left_eye=eye(open_eyes, x=30.0),
        right_eye=eye(open_eyes, x=60.0),
        nose_tip=nose,
    )


def make_detection(landmarks: FaceLandmarks | None = None, distance: float = 0.05) -> FaceDetection:
    return FaceDetection(
        landmarks=landmarks or make_landmarks(),
        embedding=sample_embedding(distance),
    )


def sample_embedding(distance: float) -> list[float]:
    """Embedding at ``distance`` from the zero descriptor, so confidence is 1 - distance."""
    return [distance] + [0.0] * (DIMENSION - 1)


def make_sample(distance: float = 0.05) -> CapturedSample:
    return CapturedSample(embedding=sample_embedding(distance))


LIVE_SEQUENCE = [
    make_landmarks(True, (50.0, 50.0)),
    make_landmarks(False, (50.0, 50.0)),
    make_landmarks(False, (50.0, 50.0)),
    make_landmarks(True, (55.0, 50.0)),
]


def make_live(verifier: LivenessVerifier) -> LivenessVerifier:
    for landmarks in LIVE_SEQUENCE:
        verifier.observe([landmarks])
    return verifier


class FakeFrameSource(FrameSource):
    def __init__(self, frame="frame"):
        self.frame = frame
        self.released = False

    def read(self):
        return self.frame

    def release(self) -> None:
        self.released = True


class FakeLandmarkExtractor(LandmarkExtractor):
    """Replays a list of per-frame detections, then repeats the last one."""

    def __init__(self, frames: list[list[FaceDetection]]):
        self.frames = frames
        self.calls = 0
        self._lock = threading.Lock()

    def predict(self, frame) -> list[FaceDetection]:
        with self._lock:
            index = min(self.calls, len(self.frames) - 1)
            self.calls += 1
        return list(self.frames[index])


@pytest.fixture
def settings():
    return KioskSettings(
        kiosk_id="kiosk-test",
        timezone="UTC",
        match_confidence_threshold=0.85,
        embedding_dimension=DIMENSION,
        liveness_poll_interval=0.01,
        liveness_timeout_seconds=0,
        upstream_timeout_seconds=1.0,
        upstream_max_retries=1,
    )


@pytest.fixture
def service(settings):
    return Service(settings)


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def factory(service, repository):
    return KioskFactory(service=service, repository=repository)


@pytest.fixture
def enrolled(repository):
    def _enroll(employee_id: str = "emp-1", descriptor=None):
        identity = EnrolledIdentity(
            employee_id=employee_id,
            descriptor=descriptor if descriptor is not None else [0.0] * DIMENSION,
        )
        repository.enrollment_repository.set_enrolled_identity(identity)
        return identity

    return _enroll


@pytest.fixture
def live_verifier(service):
    return make_live(service.new_liveness_verifier())


@pytest.fixture
def new_live_verifier(service):
    """Each accepted event consumes its liveness session, so multi-step days need one per request."""
    return lambda: make_live(service.new_liveness_verifier())
