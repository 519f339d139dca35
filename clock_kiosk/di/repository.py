from functools import cached_property

from ..data import (
    InMemoryAuditLogRepository,
    InMemoryClockEventRepository,
    InMemoryEnrollmentRepository,
    InMemoryShiftWindowRepository,
    SqliteAuditLogRepository,
    SqliteClockEventRepository,
    SqliteDatabase,
    SqliteEnrollmentRepository,
    SqliteShiftWindowRepository,
)
from ..settings import KioskSettings


class Repository:
    def __init__(self, settings: KioskSettings | None = None):
        self.settings = settings or KioskSettings.from_env()

    @cached_property
    def database(self) -> SqliteDatabase:
        return SqliteDatabase(self.settings.database_path)

    @cached_property
    def enrollment_repository(self) -> SqliteEnrollmentRepository:
        return SqliteEnrollmentRepository(self.database)

    @cached_property
    def clock_event_repository(self) -> SqliteClockEventRepository:
        return SqliteClockEventRepository(self.database)

    @cached_property
    def shift_window_repository(self) -> SqliteShiftWindowRepository:
        return SqliteShiftWindowRepository(self.database)

    @cached_property
    def audit_log_repository(self) -> SqliteAuditLogRepository:
        return SqliteAuditLogRepository(self.database)


class InMemoryRepository:
    """Process-local stores, used by tests and demos."""

    def __init__(self):
        self.enrollment_repository = InMemoryEnrollmentRepository()
        self.clock_event_repository = InMemoryClockEventRepository()
        self.shift_window_repository = InMemoryShiftWindowRepository()
        self.audit_log_repository = InMemoryAuditLogRepository()
