from datetime import date

from attrs import define, field, validators

from ...model import ClockEventStatus, ClockState
from ...repository import ClockEventRepository
from ...service.clock_state_machine import replay


@define
class GetCurrentState:
    clock_event_repository: ClockEventRepository = field(
        validator=validators.instance_of(ClockEventRepository)
    )

    def invoke(self, employee_id: str, work_date: date) -> ClockState:
        events = self.clock_event_repository.get_clock_events(
            employee_id, work_date, status=ClockEventStatus.ACCEPTED
        )
        return replay(events)
