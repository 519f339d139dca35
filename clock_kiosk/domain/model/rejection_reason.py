from enum import Enum


class RejectionReason(str, Enum):
    NO_FACE_DETECTED = "no_face_detected"
    MULTIPLE_FACES_DETECTED = "multiple_faces_detected"
    LIVENESS_FAILED = "liveness_failed"
    NOT_ENROLLED = "not_enrolled"
    LOW_CONFIDENCE = "low_confidence"
    INVALID_TRANSITION = "invalid_transition"
    UPSTREAM_TIMEOUT = "upstream_timeout"
