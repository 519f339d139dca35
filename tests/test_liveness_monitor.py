import time

import pytest

from clock_kiosk.domain.use_case import LivenessMonitor

from .conftest import LIVE_SEQUENCE, FakeFrameSource, FakeLandmarkExtractor, make_detection


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


def live_extractor():
    return FakeLandmarkExtractor([[make_detection(landmarks)] for landmarks in LIVE_SEQUENCE])


@pytest.fixture
def make_monitor(service):
    monitors = []

    def _make(frame_source=None, extractor=None):
        monitor = LivenessMonitor(
            frame_source=frame_source or FakeFrameSource(),
            landmark_extractor=extractor or live_extractor(),
            upstream_caller=service.upstream_caller,
            verifier_factory=service.new_liveness_verifier,
            interval=0.01,
        )
        monitors.append(monitor)
        return monitor

    yield _make
    for monitor in monitors:
        monitor.stop()


def test_poll_once_without_frame_observes_no_face(make_monitor, live_verifier):
    monitor = make_monitor(frame_source=FakeFrameSource(frame=None))

    monitor.poll_once(live_verifier)

    assert live_verifier.session.face_count == 0
    assert not live_verifier.is_live()


def test_poll_once_skips_frame_when_extractor_fails(make_monitor, service):
    class BrokenExtractor(FakeLandmarkExtractor):
        def predict(self, frame):
            raise RuntimeError("model crashed")

    monitor = make_monitor(extractor=BrokenExtractor([[]]))
    verifier = service.new_liveness_verifier()

    monitor.poll_once(verifier)

    assert verifier.session.frames_observed == 0


def test_started_monitor_establishes_liveness(make_monitor):
    monitor = make_monitor()

    verifier = monitor.start()

    assert monitor.running
    assert monitor.verifier is verifier
    assert wait_for(verifier.is_live)


def test_stop_closes_session(make_monitor):
    monitor = make_monitor()
    verifier = monitor.start()
    assert wait_for(verifier.is_live)

    monitor.stop()

    assert not monitor.running
    assert monitor.verifier is None
    assert verifier.session.closed
    assert not verifier.is_live()


def test_renew_replaces_session(make_monitor):
    monitor = make_monitor()
    first = monitor.start()
    assert wait_for(first.is_live)

    second = monitor.renew()

    assert second is not first
    assert first.session.closed
    assert second.session.session_id != first.session.session_id
    assert monitor.verifier is second


def test_renew_without_camera_does_nothing(make_monitor):
    monitor = make_monitor()

    assert monitor.renew() is None
    assert monitor.verifier is None
