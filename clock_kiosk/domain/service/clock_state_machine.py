from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..model import ClockEvent, ClockEventType, ClockState, ShiftWindow

TRANSITIONS: dict[tuple[ClockState, ClockEventType], ClockState] = {
    (ClockState.NOT_STARTED, ClockEventType.ARRIVAL): ClockState.WORKING,
    (ClockState.WORKING, ClockEventType.BREAK_START): ClockState.ON_BREAK,
    (ClockState.ON_BREAK, ClockEventType.BREAK_END): ClockState.WORKING,
    (ClockState.WORKING, ClockEventType.DEPARTURE): ClockState.FINISHED,
}

SUGGESTED_EVENT: dict[ClockState, Optional[ClockEventType]] = {
    ClockState.NOT_STARTED: ClockEventType.ARRIVAL,
    ClockState.WORKING: ClockEventType.DEPARTURE,
    ClockState.ON_BREAK: ClockEventType.BREAK_END,
    ClockState.FINISHED: None,
}


def transition(state: ClockState, event_type: ClockEventType) -> Optional[ClockState]:
    """Next state, or None when the event is not legal in ``state``."""
    return TRANSITIONS.get((state, event_type))


def allowed_events(state: ClockState) -> list[ClockEventType]:
    return [event for (current, event) in TRANSITIONS if current == state]


def replay(events: Iterable[ClockEvent]) -> ClockState:
    """Fold accepted events, oldest first, into the current state."""
    state = ClockState.NOT_STARTED
    for event in sorted(events, key=lambda e: e.timestamp):
        if not event.is_accepted:
            continue
        next_state = transition(state, event.event_type)
        if next_state is None:
            raise ValueError(
                f"Stored event {event.event_id} ({event.event_type.value}) "
                f"is illegal after {state.value}"
            )
        state = next_state
    return state


def minutes_late(local_timestamp: datetime, shift_window: ShiftWindow) -> int:
    expected = datetime.combine(
        local_timestamp.date(), shift_window.expected_entry, tzinfo=local_timestamp.tzinfo
    )
    deadline = expected + timedelta(minutes=shift_window.tolerance_minutes)
    late = local_timestamp - deadline
    if late <= timedelta(0):
        return 0
    return int(late.total_seconds() // 60)


def break_minutes(break_started: datetime, break_ended: datetime) -> int:
    return max(0, int((break_ended - break_started).total_seconds() // 60))
