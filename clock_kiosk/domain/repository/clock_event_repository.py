from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from ..model import ClockEvent, ClockEventStatus


class ClockEventRepository(ABC):
    @abstractmethod
    def add_clock_event(self, event: ClockEvent) -> ClockEvent:
        raise NotImplementedError("Implement add_clock_event method")

    @abstractmethod
    def get_clock_events(
        self,
        employee_id: str,
        work_date: date,
        status: Optional[ClockEventStatus] = None,
    ) -> list[ClockEvent]:
        """Events for one employee and working day, oldest first."""
        raise NotImplementedError("Implement get_clock_events method")
