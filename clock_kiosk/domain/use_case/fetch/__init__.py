from .get_current_state import GetCurrentState
from .get_next_event_type import GetNextEventType
from .get_clock_events import GetClockEvents
from .identify_employee import IdentifyEmployee

__all__ = [
    "GetCurrentState",
    "GetNextEventType",
    "GetClockEvents",
    "IdentifyEmployee",
]
