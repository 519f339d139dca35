from .in_memory_repository import (
    InMemoryAuditLogRepository,
    InMemoryClockEventRepository,
    InMemoryEnrollmentRepository,
    InMemoryShiftWindowRepository,
)
from .sqlite_repository import (
    SqliteAuditLogRepository,
    SqliteClockEventRepository,
    SqliteDatabase,
    SqliteEnrollmentRepository,
    SqliteShiftWindowRepository,
)

__all__ = [
    "CameraFrameSource",
    "InMemoryAuditLogRepository",
    "InMemoryClockEventRepository",
    "InMemoryEnrollmentRepository",
    "InMemoryShiftWindowRepository",
    "SqliteAuditLogRepository",
    "SqliteClockEventRepository",
    "SqliteDatabase",
    "SqliteEnrollmentRepository",
    "SqliteShiftWindowRepository",
]


def __getattr__(name):
    if name == "CameraFrameSource":
        from .camera_frame_source import CameraFrameSource

        globals()[name] = CameraFrameSource
        return CameraFrameSource
    raise AttributeError(f"module 'clock_kiosk.data' has no attribute '{name}'")
