import json
import sqlite3
import threading
from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

import numpy as np

from ..domain.model import (
    AuditEntry,
    ClockEvent,
    ClockEventStatus,
    ClockEventType,
    EnrolledIdentity,
    Location,
    RejectionReason,
    ShiftWindow,
)
from ..domain.repository import (
    AuditLogRepository,
    ClockEventRepository,
    EnrollmentRepository,
    ShiftWindowRepository,
)
from ..utils import get_logger

logger = get_logger(__name__)


class SqliteDatabase:
    """Shared SQLite connection for the kiosk's local stores."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.lock = threading.Lock()
        self._initialize_tables()

    def _initialize_tables(self) -> None:
        with self.lock:
            self.conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS enrolled_identities (
                    employee_id TEXT PRIMARY KEY,
                    descriptor BLOB NOT NULL,
                    enrolled_at TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS clock_events (
                    event_id TEXT PRIMARY KEY,
                    employee_id TEXT NOT NULL,
                    event_type TEXT NOT NULL,
                    timestamp TEXT NOT NULL,
                    work_date TEXT NOT NULL,
                    status TEXT NOT NULL,
                    confidence REAL,
                    rejection_reason TEXT,
                    minutes_late INTEGER,
                    break_minutes INTEGER,
                    latitude REAL,
                    longitude REAL,
                    kiosk_id TEXT
                );
                CREATE INDEX IF NOT EXISTS idx_clock_events_day
                    ON clock_events (employee_id, work_date);
                CREATE TABLE IF NOT EXISTS shift_windows (
                    employee_id TEXT NOT NULL,
                    weekday INTEGER NOT NULL,
                    expected_entry TEXT NOT NULL,
                    expected_exit TEXT,
                    tolerance_minutes INTEGER NOT NULL DEFAULT 0,
                    PRIMARY KEY (employee_id, weekday)
                );
                CREATE TABLE IF NOT EXISTS audit_log (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    actor TEXT NOT NULL,
                    action TEXT NOT NULL,
                    subject_employee_id TEXT NOT NULL,
                    metadata TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );
                """
            )
            self.conn.commit()
        logger.info("SQLite stores ready at %s", self.db_path)

    def close(self) -> None:
        with self.lock:
            self.conn.close()


class SqliteEnrollmentRepository(EnrollmentRepository):
    def __init__(self, database: SqliteDatabase):
        self.database = database

    @staticmethod
    def _to_identity(row) -> EnrolledIdentity:
        employee_id, blob, enrolled_at = row
        descriptor = np.frombuffer(blob, dtype=np.float32)
        return EnrolledIdentity(
            employee_id=employee_id,
            descriptor=descriptor.tolist(),
            enrolled_at=datetime.fromisoformat(enrolled_at),
        )

    def get_enrolled_identity(self, employee_id: str) -> Optional[EnrolledIdentity]:
        with self.database.lock:
            row = self.database.conn.execute(
                "SELECT employee_id, descriptor, enrolled_at FROM enrolled_identities "
                "WHERE employee_id = ?",
                (employee_id,),
            ).fetchone()
        return self._to_identity(row) if row else None

    def set_enrolled_identity(self, identity: EnrolledIdentity) -> EnrolledIdentity:
        blob = np.asarray(identity.descriptor, dtype=np.float32).tobytes()
        with self.database.lock:
            self.database.conn.execute(
                "INSERT OR REPLACE INTO enrolled_identities (employee_id, descriptor, enrolled_at) "
                "VALUES (?, ?, ?)",
                (identity.employee_id, blob, identity.enrolled_at.isoformat()),
            )
            self.database.conn.commit()
        return identity

    def delete_enrolled_identity(self, employee_id: str) -> bool:
        with self.database.lock:
            cursor = self.database.conn.execute(
                "DELETE FROM enrolled_identities WHERE employee_id = ?", (employee_id,)
            )
            self.database.conn.commit()
        return cursor.rowcount > 0

    def get_enrolled_identities(self) -> list[EnrolledIdentity]:
        with self.database.lock:
            rows = self.database.conn.execute(
                "SELECT employee_id, descriptor, enrolled_at FROM enrolled_identities"
            ).fetchall()
        if not rows:
            logger.warning("No enrolled identities found in database.")
        return [self._to_identity(row) for row in rows]


class SqliteClockEventRepository(ClockEventRepository):
    _COLUMNS = (
        "event_id, employee_id, event_type, timestamp, work_date, status, confidence, "
        "rejection_reason, minutes_late, break_minutes, latitude, longitude, kiosk_id"
    )

    def __init__(self, database: SqliteDatabase):
        self.database = database

    def add_clock_event(self, event: ClockEvent) -> ClockEvent:
        with self.database.lock:
            self.database.conn.execute(
                f"INSERT INTO clock_events ({self._COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(event.event_id),
                    event.employee_id,
                    event.event_type.value,
                    event.timestamp.isoformat(),
                    event.work_date.isoformat(),
                    event.status.value,
                    event.confidence,
                    event.rejection_reason.value if event.rejection_reason else None,
                    event.minutes_late,
                    event.break_minutes,
                    event.location.latitude if event.location else None,
                    event.location.longitude if event.location else None,
                    event.kiosk_id,
                ),
            )
            self.database.conn.commit()
        return event

    def get_clock_events(
        self,
        employee_id: str,
        work_date: date,
        status: Optional[ClockEventStatus] = None,
    ) -> list[ClockEvent]:
        query = f"SELECT {self._COLUMNS} FROM clock_events WHERE employee_id = ? AND work_date = ?"
        params: list = [employee_id, work_date.isoformat()]
        if status is not None:
            query += " AND status = ?"
            params.append(status.value)
        with self.database.lock:
            rows = self.database.conn.execute(query, params).fetchall()

        events = [self._to_event(row) for row in rows]
        return sorted(events, key=lambda event: event.timestamp)

    @staticmethod
    def _to_event(row) -> ClockEvent:
        (
            event_id,
            employee_id,
            event_type,
            timestamp,
            work_date,
            status,
            confidence,
            rejection_reason,
            minutes_late,
            break_minutes,
            latitude,
            longitude,
            kiosk_id,
        ) = row
        location = None
        if latitude is not None and longitude is not None:
            location = Location(latitude=latitude, longitude=longitude)
        return ClockEvent(
            event_id=UUID(event_id),
            employee_id=employee_id,
            event_type=ClockEventType(event_type),
            timestamp=datetime.fromisoformat(timestamp),
            work_date=date.fromisoformat(work_date),
            status=ClockEventStatus(status),
            confidence=confidence,
            rejection_reason=RejectionReason(rejection_reason) if rejection_reason else None,
            minutes_late=minutes_late,
            break_minutes=break_minutes,
            location=location,
            kiosk_id=kiosk_id,
        )


class SqliteShiftWindowRepository(ShiftWindowRepository):
    """Read side of the shift roster, one row per employee and weekday."""

    def __init__(self, database: SqliteDatabase):
        self.database = database

    def set_shift_window(self, employee_id: str, weekday: int, window: ShiftWindow) -> None:
        with self.database.lock:
            self.database.conn.execute(
                "INSERT OR REPLACE INTO shift_windows "
                "(employee_id, weekday, expected_entry, expected_exit, tolerance_minutes) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    employee_id,
                    weekday,
                    window.expected_entry.isoformat(),
                    window.expected_exit.isoformat() if window.expected_exit else None,
                    window.tolerance_minutes,
                ),
            )
            self.database.conn.commit()

    def get_shift_window(self, employee_id: str, work_date: date) -> Optional[ShiftWindow]:
        with self.database.lock:
            row = self.database.conn.execute(
                "SELECT expected_entry, expected_exit, tolerance_minutes FROM shift_windows "
                "WHERE employee_id = ? AND weekday = ?",
                (employee_id, work_date.weekday()),
            ).fetchone()
        if row is None:
            return None
        expected_entry, expected_exit, tolerance_minutes = row
        return ShiftWindow(
            expected_entry=time.fromisoformat(expected_entry),
            expected_exit=time.fromisoformat(expected_exit) if expected_exit else None,
            tolerance_minutes=tolerance_minutes,
        )


class SqliteAuditLogRepository(AuditLogRepository):
    def __init__(self, database: SqliteDatabase):
        self.database = database

    def append_audit_entry(self, entry: AuditEntry) -> AuditEntry:
        with self.database.lock:
            self.database.conn.execute(
                "INSERT INTO audit_log (actor, action, subject_employee_id, metadata, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    entry.actor,
                    entry.action,
                    entry.subject_employee_id,
                    json.dumps(entry.metadata),
                    entry.created_at.isoformat(),
                ),
            )
            self.database.conn.commit()
        return entry

    def get_audit_entries(self, subject_employee_id: str) -> list[AuditEntry]:
        with self.database.lock:
            rows = self.database.conn.execute(
                "SELECT actor, action, subject_employee_id, metadata, created_at FROM audit_log "
                "WHERE subject_employee_id = ? ORDER BY id",
                (subject_employee_id,),
            ).fetchall()
        return [
            AuditEntry(
                actor=actor,
                action=action,
                subject_employee_id=subject,
                metadata=json.loads(metadata),
                created_at=datetime.fromisoformat(created_at),
            )
            for actor, action, subject, metadata, created_at in rows
        ]
