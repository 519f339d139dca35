from .add import EnrollEmployee, EnrollFromFrame, RequestClockEvent
from .delete import RevokeEnrollment
from .fetch import GetClockEvents, GetCurrentState, GetNextEventType, IdentifyEmployee
from .internal_logic import CaptureSample, KioskSession, LivenessMonitor

__all__ = [
    "EnrollEmployee",
    "EnrollFromFrame",
    "RequestClockEvent",
    "RevokeEnrollment",
    "GetClockEvents",
    "GetCurrentState",
    "GetNextEventType",
    "IdentifyEmployee",
    "CaptureSample",
    "KioskSession",
    "LivenessMonitor",
]
