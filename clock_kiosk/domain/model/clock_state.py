from enum import Enum


class ClockState(str, Enum):
    NOT_STARTED = "not_started"
    WORKING = "working"
    ON_BREAK = "on_break"
    FINISHED = "finished"
