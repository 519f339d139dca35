from .rejection_reason import RejectionReason
from .clock_event_type import ClockEventType
from .clock_event_status import ClockEventStatus
from .clock_state import ClockState
from .location import Location
from .face_landmarks import FaceLandmarks, FaceDetection
from .captured_sample import CapturedSample
from .enrolled_identity import EnrolledIdentity
from .shift_window import ShiftWindow
from .audit_entry import AuditEntry
from .identification_result import IdentificationResult
from .clock_event import ClockEvent
from .liveness_session import LivenessSession


__all__ = [
    "RejectionReason",
    "ClockEventType",
    "ClockEventStatus",
    "ClockState",
    "Location",
    "FaceLandmarks",
    "FaceDetection",
    "CapturedSample",
    "EnrolledIdentity",
    "ShiftWindow",
    "AuditEntry",
    "IdentificationResult",
    "ClockEvent",
    "LivenessSession",
]
