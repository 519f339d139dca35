from .enrollment_repository import EnrollmentRepository
from .clock_event_repository import ClockEventRepository
from .shift_window_repository import ShiftWindowRepository
from .audit_log_repository import AuditLogRepository

__all__ = [
    "EnrollmentRepository",
    "ClockEventRepository",
    "ShiftWindowRepository",
    "AuditLogRepository",
]
