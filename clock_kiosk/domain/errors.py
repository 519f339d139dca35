"""Recoverable, user-facing conditions raised by the verification engine.

None of these end a kiosk session. Each one maps to a rejection reason that is
stored on the rejected clock event and to an instruction shown to the employee.
"""

from .model import RejectionReason


class ClockKioskError(Exception):
    reason: RejectionReason
    instruction: str = "Please try again"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.instruction)


class NoFaceDetected(ClockKioskError):
    reason = RejectionReason.NO_FACE_DETECTED
    instruction = "Look directly at the camera"


class MultipleFacesDetected(ClockKioskError):
    reason = RejectionReason.MULTIPLE_FACES_DETECTED
    instruction = "Only one person may be in front of the camera"


class LivenessFailed(ClockKioskError):
    reason = RejectionReason.LIVENESS_FAILED
    instruction = "Blink and move your head slightly"


class NotEnrolled(ClockKioskError):
    reason = RejectionReason.NOT_ENROLLED
    instruction = "Your face is not enrolled, contact HR"

    def __init__(self, employee_id: str | None = None):
        self.employee_id = employee_id
        if employee_id is None:
            super().__init__("No enrolled descriptor")
        else:
            super().__init__(f"No enrolled descriptor for employee {employee_id}")


class LowConfidence(ClockKioskError):
    reason = RejectionReason.LOW_CONFIDENCE
    instruction = "Face not recognised, try again"

    def __init__(self, confidence: float, threshold: float):
        self.confidence = confidence
        self.threshold = threshold
        super().__init__(f"Confidence {confidence:.3f} below threshold {threshold:.3f}")


class InvalidTransition(ClockKioskError):
    reason = RejectionReason.INVALID_TRANSITION
    instruction = "This action is not available right now"

    def __init__(self, state, event_type, message: str | None = None):
        self.state = state
        self.event_type = event_type
        super().__init__(message or f"Cannot apply {event_type.value} while {state.value}")


class UpstreamTimeout(ClockKioskError):
    reason = RejectionReason.UPSTREAM_TIMEOUT
    instruction = "The system is busy, try again later"


_INSTRUCTIONS = {
    error.reason: error.instruction
    for error in (
        NoFaceDetected,
        MultipleFacesDetected,
        LivenessFailed,
        NotEnrolled,
        LowConfidence,
        InvalidTransition,
        UpstreamTimeout,
    )
}


def instruction_for(reason: RejectionReason | None) -> str | None:
    if reason is None:
        return None
    return _INSTRUCTIONS[reason]
