from enum import Enum


class ClockEventType(str, Enum):
    ARRIVAL = "arrival"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
    DEPARTURE = "departure"
