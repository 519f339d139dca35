from .enroll_employee import EnrollEmployee
from .enroll_from_frame import EnrollFromFrame
from .request_clock_event import RequestClockEvent

__all__ = [
    "EnrollEmployee",
    "EnrollFromFrame",
    "RequestClockEvent",
]
