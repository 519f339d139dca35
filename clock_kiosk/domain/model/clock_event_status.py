from enum import Enum


class ClockEventStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
