from datetime import date, datetime, time, timezone

import pytest

from clock_kiosk.domain.model import (
    ClockEvent,
    ClockEventStatus,
    ClockEventType,
    ClockState,
    RejectionReason,
    ShiftWindow,
)
from clock_kiosk.domain.service.clock_state_machine import (
    SUGGESTED_EVENT,
    allowed_events,
    break_minutes,
    minutes_late,
    replay,
    transition,
)

WORK_DATE = date(2024, 3, 4)


def at(hour, minute=0, second=0):
    return datetime(2024, 3, 4, hour, minute, second, tzinfo=timezone.utc)


def event(event_type, timestamp, status=ClockEventStatus.ACCEPTED):
    return ClockEvent(
        employee_id="emp-1",
        event_type=event_type,
        timestamp=timestamp,
        work_date=WORK_DATE,
        status=status,
        rejection_reason=None if status == ClockEventStatus.ACCEPTED else RejectionReason.LOW_CONFIDENCE,
    )


@pytest.mark.parametrize(
    "state, event_type, expected",
    [
        (ClockState.NOT_STARTED, ClockEventType.ARRIVAL, ClockState.WORKING),
        (ClockState.WORKING, ClockEventType.BREAK_START, ClockState.ON_BREAK),
        (ClockState.ON_BREAK, ClockEventType.BREAK_END, ClockState.WORKING),
        (ClockState.WORKING, ClockEventType.DEPARTURE, ClockState.FINISHED),
        (ClockState.NOT_STARTED, ClockEventType.DEPARTURE, None),
        (ClockState.WORKING, ClockEventType.ARRIVAL, None),
        (ClockState.ON_BREAK, ClockEventType.DEPARTURE, None),
        (ClockState.FINISHED, ClockEventType.ARRIVAL, None),
    ],
)
def test_transition(state, event_type, expected):
    assert transition(state, event_type) == expected


def test_finished_is_terminal():
    assert allowed_events(ClockState.FINISHED) == []
    assert SUGGESTED_EVENT[ClockState.FINISHED] is None


def test_allowed_events_while_working():
    assert set(allowed_events(ClockState.WORKING)) == {
        ClockEventType.BREAK_START,
        ClockEventType.DEPARTURE,
    }


def test_replay_of_empty_day_is_not_started():
    assert replay([]) == ClockState.NOT_STARTED


def test_replay_orders_by_timestamp_and_skips_rejections():
    events = [
        event(ClockEventType.BREAK_START, at(12)),
        event(ClockEventType.DEPARTURE, at(11), ClockEventStatus.REJECTED),
        event(ClockEventType.ARRIVAL, at(9)),
    ]

    assert replay(events) == ClockState.ON_BREAK


def test_replay_rejects_corrupt_history():
    with pytest.raises(ValueError):
        replay([event(ClockEventType.BREAK_END, at(9))])


def test_minutes_late_after_tolerance():
    window = ShiftWindow(expected_entry=time(9, 0), tolerance_minutes=5)

    assert minutes_late(at(9, 10), window) == 5
    assert minutes_late(at(9, 10, 59), window) == 5


def test_minutes_late_within_tolerance_is_zero():
    window = ShiftWindow(expected_entry=time(9, 0), tolerance_minutes=5)

    assert minutes_late(at(8, 30), window) == 0
    assert minutes_late(at(9, 5), window) == 0


def test_break_minutes():
    assert break_minutes(at(12), at(12, 30, 45)) == 30
    assert break_minutes(at(12, 30), at(12)) == 0
