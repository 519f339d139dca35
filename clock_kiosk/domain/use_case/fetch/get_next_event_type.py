from datetime import date
from typing import Optional

from attrs import define, field, validators

from ...model import ClockEventType
from ...service.clock_state_machine import SUGGESTED_EVENT
from .get_current_state import GetCurrentState


@define
class GetNextEventType:
    get_current_state: GetCurrentState = field(
        validator=validators.instance_of(GetCurrentState)
    )

    def invoke(self, employee_id: str, work_date: date) -> Optional[ClockEventType]:
        state = self.get_current_state.invoke(employee_id, work_date)
        return SUGGESTED_EVENT[state]
