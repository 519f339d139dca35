import pytest

from clock_kiosk.domain.errors import MultipleFacesDetected, NoFaceDetected
from clock_kiosk.domain.model import CapturedSample, ClockEventType, RejectionReason

from .conftest import FakeLandmarkExtractor, make_detection, make_sample


def test_enroll_stores_descriptor_and_audits(factory, repository):
    identity = factory.enroll_employee().invoke("emp-1", make_sample(0.2), actor="hr:alice")

    assert identity.employee_id == "emp-1"
    assert identity.descriptor == (0.2, 0.0, 0.0, 0.0)
    assert repository.enrollment_repository.get_enrolled_identity("emp-1") == identity

    [entry] = repository.audit_log_repository.entries
    assert entry.actor == "hr:alice"
    assert entry.action == "enroll"
    assert entry.subject_employee_id == "emp-1"
    assert entry.metadata == {"replaced": False, "dimension": 4}


def test_re_enrollment_replaces_descriptor(factory, repository):
    enroll = factory.enroll_employee()
    enroll.invoke("emp-1", make_sample(0.2), actor="hr:alice")
    enroll.invoke("emp-1", make_sample(0.4), actor="hr:bob")

    stored = repository.enrollment_repository.get_enrolled_identity("emp-1")
    assert stored.descriptor[0] == pytest.approx(0.4)
    assert repository.audit_log_repository.entries[-1].metadata["replaced"] is True


def test_enroll_rejects_wrong_dimension(factory, repository):
    with pytest.raises(ValueError):
        factory.enroll_employee().invoke("emp-1", CapturedSample(embedding=[0.1] * 3), "hr:alice")

    assert repository.enrollment_repository.get_enrolled_identity("emp-1") is None
    assert repository.audit_log_repository.entries == []


def test_revoke_clears_descriptor(factory, repository, enrolled, live_verifier):
    enrolled("emp-1")

    assert factory.revoke_enrollment().invoke("emp-1", actor="hr:alice") is True
    assert repository.enrollment_repository.get_enrolled_identity("emp-1") is None
    entry = repository.audit_log_repository.entries[-1]
    assert (entry.action, entry.metadata) == ("revoke", {"removed": True})

    event = factory.request_clock_event().invoke(
        "emp-1", ClockEventType.ARRIVAL, make_sample(), live_verifier
    )
    assert event.rejection_reason == RejectionReason.NOT_ENROLLED


def test_revoke_unknown_employee_returns_false(factory):
    assert factory.revoke_enrollment().invoke("emp-404", actor="hr:alice") is False


def test_enroll_from_frame(factory, repository):
    extractor = FakeLandmarkExtractor([[make_detection(distance=0.3)]])

    identity = factory.enroll_from_frame(extractor).invoke("emp-1", "frame", actor="hr:alice")

    assert identity.descriptor == (0.3, 0.0, 0.0, 0.0)
    assert extractor.calls == 1


def test_enroll_from_frame_requires_exactly_one_face(factory):
    empty = FakeLandmarkExtractor([[]])
    crowded = FakeLandmarkExtractor([[make_detection(), make_detection()]])

    with pytest.raises(NoFaceDetected):
        factory.enroll_from_frame(empty).invoke("emp-1", "frame", actor="hr:alice")
    with pytest.raises(MultipleFacesDetected):
        factory.enroll_from_frame(crowded).invoke("emp-1", "frame", actor="hr:alice")


def test_capture_without_frame_reports_no_face(factory):
    extractor = FakeLandmarkExtractor([[make_detection()]])

    with pytest.raises(NoFaceDetected):
        factory.capture_sample(extractor).invoke(None)
    assert extractor.calls == 0
