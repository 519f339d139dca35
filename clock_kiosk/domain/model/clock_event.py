from datetime import date, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from .clock_event_status import ClockEventStatus
from .clock_event_type import ClockEventType
from .location import Location
from .rejection_reason import RejectionReason


class ClockEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    employee_id: str
    event_type: ClockEventType
    timestamp: datetime
    work_date: date
    status: ClockEventStatus
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    rejection_reason: RejectionReason | None = None
    minutes_late: int | None = None
    break_minutes: int | None = None
    location: Location | None = None
    kiosk_id: str | None = None

    @property
    def is_accepted(self) -> bool:
        return self.status == ClockEventStatus.ACCEPTED

    @property
    def is_late(self) -> bool:
        return bool(self.minutes_late)

    def to_json(self):
        return {
            "event_id": str(self.event_id),
            "employee_id": self.employee_id,
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "work_date": self.work_date.isoformat(),
            "status": self.status.value,
            "confidence": self.confidence,
            "rejection_reason": self.rejection_reason.value if self.rejection_reason else None,
            "minutes_late": self.minutes_late,
            "break_minutes": self.break_minutes,
            "location": self.location.model_dump() if self.location else None,
            "kiosk_id": self.kiosk_id,
        }
