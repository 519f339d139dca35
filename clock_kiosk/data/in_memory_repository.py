import threading
from collections import defaultdict
from datetime import date
from typing import Optional

from ..domain.model import AuditEntry, ClockEvent, ClockEventStatus, EnrolledIdentity, ShiftWindow
from ..domain.repository import (
    AuditLogRepository,
    ClockEventRepository,
    EnrollmentRepository,
    ShiftWindowRepository,
)


class InMemoryEnrollmentRepository(EnrollmentRepository):
    def __init__(self):
        self._identities: dict[str, EnrolledIdentity] = {}
        self._lock = threading.Lock()

    def get_enrolled_identity(self, employee_id: str) -> Optional[EnrolledIdentity]:
        with self._lock:
            return self._identities.get(employee_id)

    def set_enrolled_identity(self, identity: EnrolledIdentity) -> EnrolledIdentity:
        with self._lock:
            self._identities[identity.employee_id] = identity
        return identity

    def delete_enrolled_identity(self, employee_id: str) -> bool:
        with self._lock:
            return self._identities.pop(employee_id, None) is not None

    def get_enrolled_identities(self) -> list[EnrolledIdentity]:
        with self._lock:
            return list(self._identities.values())


class InMemoryClockEventRepository(ClockEventRepository):
    def __init__(self):
        self._events: dict[tuple[str, date], list[ClockEvent]] = defaultdict(list)
        self._lock = threading.Lock()

    def add_clock_event(self, event: ClockEvent) -> ClockEvent:
        with self._lock:
            self._events[(event.employee_id, event.work_date)].append(event)
        return event

    def get_clock_events(
        self,
        employee_id: str,
        work_date: date,
        status: Optional[ClockEventStatus] = None,
    ) -> list[ClockEvent]:
        with self._lock:
            events = list(self._events.get((employee_id, work_date), []))
        if status is not None:
            events = [event for event in events if event.status == status]
        return sorted(events, key=lambda event: event.timestamp)


class InMemoryShiftWindowRepository(ShiftWindowRepository):
    """Shift windows keyed by employee and weekday (Monday is 0)."""

    def __init__(self):
        self._windows: dict[tuple[str, int], ShiftWindow] = {}

    def set_shift_window(self, employee_id: str, weekday: int, window: ShiftWindow) -> None:
        self._windows[(employee_id, weekday)] = window

    def get_shift_window(self, employee_id: str, work_date: date) -> Optional[ShiftWindow]:
        return self._windows.get((employee_id, work_date.weekday()))


class InMemoryAuditLogRepository(AuditLogRepository):
    def __init__(self):
        self.entries: list[AuditEntry] = []
        self._lock = threading.Lock()

    def append_audit_entry(self, entry: AuditEntry) -> AuditEntry:
        with self._lock:
            self.entries.append(entry)
        return entry
