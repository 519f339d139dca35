import threading
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Callable, Optional

from attrs import define, field, validators

from ...errors import (
    ClockKioskError,
    InvalidTransition,
    LivenessFailed,
    LowConfidence,
    NotEnrolled,
    UpstreamTimeout,
)
from ...model import (
    AuditEntry,
    CapturedSample,
    ClockEvent,
    ClockEventStatus,
    ClockEventType,
    Location,
)
from ...repository import (
    AuditLogRepository,
    ClockEventRepository,
    EnrollmentRepository,
    ShiftWindowRepository,
)
from ...service import DescriptorMatcher, LivenessVerifier, UpstreamCaller
from ...service.clock_state_machine import break_minutes, minutes_late, replay, transition
from ....settings import KioskSettings
from ....utils import get_logger

logger = get_logger(__name__)


class _DayLocks:
    """One lock per (employee, working day), kept only while someone holds or waits on it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[tuple[str, date], list] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, employee_id: str, work_date: date):
        key = (employee_id, work_date)
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@define
class RequestClockEvent:
    """Verify a captured face and apply one clock event to the employee's day.

    Every call persists exactly one clock event, accepted or rejected. Guards
    run in order: liveness, enrollment and match, confidence threshold, state
    transition. An event must also be later than the day's last accepted one.
    The whole sequence holds the employee/day lock so concurrent requests
    cannot both move the state, and an accepted event closes the liveness
    session it consumed.
    """

    enrollment_repository: EnrollmentRepository = field(
        validator=validators.instance_of(EnrollmentRepository)
    )
    clock_event_repository: ClockEventRepository = field(
        validator=validators.instance_of(ClockEventRepository)
    )
    shift_window_repository: ShiftWindowRepository = field(
        validator=validators.instance_of(ShiftWindowRepository)
    )
    audit_log_repository: AuditLogRepository = field(
        validator=validators.instance_of(AuditLogRepository)
    )
    descriptor_matcher: DescriptorMatcher = field(
        validator=validators.instance_of(DescriptorMatcher)
    )
    upstream_caller: UpstreamCaller = field(
        validator=validators.instance_of(UpstreamCaller)
    )
    settings: KioskSettings = field(validator=validators.instance_of(KioskSettings))
    now: Callable[[], datetime] = field(default=_utc_now)
    _locks: _DayLocks = field(factory=_DayLocks, init=False)

    def invoke(
        self,
        employee_id: str,
        event_type: ClockEventType,
        sample: CapturedSample,
        liveness_session: Optional[LivenessVerifier],
        timestamp: datetime | None = None,
        location: Location | None = None,
    ) -> ClockEvent:
        timestamp, work_date = self._resolve_time(timestamp)

        with self._locks.hold(employee_id, work_date):
            accepted = self.clock_event_repository.get_clock_events(
                employee_id, work_date, status=ClockEventStatus.ACCEPTED
            )
            state = replay(accepted)
            confidence = None
            try:
                if liveness_session is None or not liveness_session.is_live():
                    raise LivenessFailed()

                identity = self.upstream_caller.call(
                    "enrollment store",
                    self.enrollment_repository.get_enrolled_identity,
                    employee_id,
                )
                if identity is None:
                    raise NotEnrolled(employee_id)
                confidence = self.descriptor_matcher.match(sample, identity)

                if not self.descriptor_matcher.is_accepted(confidence):
                    raise LowConfidence(confidence, self.descriptor_matcher.threshold)

                next_state = transition(state, event_type)
                if next_state is None:
                    raise InvalidTransition(state, event_type)
                if accepted and timestamp <= accepted[-1].timestamp:
                    raise InvalidTransition(
                        state,
                        event_type,
                        f"{event_type.value} at {timestamp.isoformat()} is not after the last "
                        f"accepted event at {accepted[-1].timestamp.isoformat()}",
                    )
            except ClockKioskError as exc:
                return self._store_rejection(
                    employee_id, event_type, timestamp, work_date, exc, confidence, location
                )

            logger.info(
                "Accepted %s for %s: live=True, confidence %.3f >= %.3f, %s -> %s",
                event_type.value,
                employee_id,
                confidence,
                self.descriptor_matcher.threshold,
                state.value,
                next_state.value,
            )
            event = ClockEvent(
                employee_id=employee_id,
                event_type=event_type,
                timestamp=timestamp,
                work_date=work_date,
                status=ClockEventStatus.ACCEPTED,
                confidence=confidence,
                minutes_late=self._minutes_late(employee_id, event_type, timestamp, work_date),
                break_minutes=self._break_minutes(event_type, timestamp, accepted),
                location=location,
                kiosk_id=self.settings.kiosk_id,
            )
            stored = self._persist(event)
            # one liveness proof buys one accepted event
            liveness_session.close()
            return stored

    def reject(
        self,
        employee_id: str,
        event_type: ClockEventType,
        error: ClockKioskError,
        timestamp: datetime | None = None,
        location: Location | None = None,
    ) -> ClockEvent:
        """Record a request that failed before verification could run."""
        timestamp, work_date = self._resolve_time(timestamp)
        with self._locks.hold(employee_id, work_date):
            return self._store_rejection(
                employee_id, event_type, timestamp, work_date, error, None, location
            )

    def _resolve_time(self, timestamp: datetime | None) -> tuple[datetime, date]:
        tz = self.settings.tzinfo
        if timestamp is None:
            timestamp = self.now()
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=tz)
        local = timestamp.astimezone(tz)
        return local, local.date()

    def _store_rejection(
        self,
        employee_id: str,
        event_type: ClockEventType,
        timestamp: datetime,
        work_date: date,
        error: ClockKioskError,
        confidence: float | None,
        location: Location | None,
    ) -> ClockEvent:
        logger.warning(
            "Rejected %s for %s: %s (%s)", event_type.value, employee_id, error.reason.value, error
        )
        event = ClockEvent(
            employee_id=employee_id,
            event_type=event_type,
            timestamp=timestamp,
            work_date=work_date,
            status=ClockEventStatus.REJECTED,
            confidence=confidence,
            rejection_reason=error.reason,
            location=location,
            kiosk_id=self.settings.kiosk_id,
        )
        return self._persist(event)

    def _persist(self, event: ClockEvent) -> ClockEvent:
        stored = self.clock_event_repository.add_clock_event(event)
        try:
            self.audit_log_repository.append_audit_entry(
                AuditEntry(
                    actor=f"kiosk:{self.settings.kiosk_id}",
                    action="clock_event",
                    subject_employee_id=event.employee_id,
                    metadata={
                        "event_id": str(event.event_id),
                        "event_type": event.event_type.value,
                        "status": event.status.value,
                        "rejection_reason": (
                            event.rejection_reason.value if event.rejection_reason else None
                        ),
                        "confidence": event.confidence,
                    },
                )
            )
        except Exception as e:
            logger.error(f"Failed to append audit entry for event {event.event_id}: {e}")
        return stored

    def _minutes_late(
        self,
        employee_id: str,
        event_type: ClockEventType,
        timestamp: datetime,
        work_date: date,
    ) -> int | None:
        if event_type != ClockEventType.ARRIVAL:
            return None
        try:
            shift_window = self.upstream_caller.call(
                "shift provider",
                self.shift_window_repository.get_shift_window,
                employee_id,
                work_date,
            )
        except UpstreamTimeout:
            logger.warning("Shift window unavailable for %s, lateness not computed", employee_id)
            return None
        if shift_window is None:
            return None
        return minutes_late(timestamp, shift_window)

    @staticmethod
    def _break_minutes(
        event_type: ClockEventType, timestamp: datetime, accepted: list[ClockEvent]
    ) -> int | None:
        if event_type != ClockEventType.BREAK_END:
            return None
        starts = [e for e in accepted if e.event_type == ClockEventType.BREAK_START]
        if not starts:
            return None
        last_start = max(starts, key=lambda e: e.timestamp)
        return break_minutes(last_start.timestamp, timestamp)

