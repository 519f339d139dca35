from datetime import date

from attrs import define, field, validators

from ...model import ClockEvent
from ...repository import ClockEventRepository
from ....utils import get_logger

logger = get_logger(__name__)


@define
class GetClockEvents:
    clock_event_repository: ClockEventRepository = field(
        validator=validators.instance_of(ClockEventRepository)
    )

    def invoke(self, employee_id: str, work_date: date) -> list[ClockEvent]:
        events = self.clock_event_repository.get_clock_events(employee_id, work_date)
        logger.info(f"Retrieved {len(events)} clock events for {employee_id} on {work_date}")
        return sorted(events, key=lambda event: event.timestamp)
