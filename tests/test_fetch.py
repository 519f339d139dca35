from datetime import date, datetime, timezone

import pytest

from clock_kiosk.domain.model import ClockEventType, ClockState

from .conftest import make_sample

MONDAY = date(2024, 3, 4)


def at(hour, minute=0):
    return datetime(2024, 3, 4, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def clock(factory, enrolled, new_live_verifier):
    enrolled("emp-1")
    use_case = factory.request_clock_event()

    def _clock(event_type, timestamp, distance=0.05):
        return use_case.invoke("emp-1", event_type, make_sample(distance), new_live_verifier(), timestamp=timestamp)

    return _clock


def test_next_event_type_follows_state(factory, clock):
    next_event = factory.get_next_event_type()

    assert next_event.invoke("emp-1", MONDAY) == ClockEventType.ARRIVAL
    clock(ClockEventType.ARRIVAL, at(9))
    assert next_event.invoke("emp-1", MONDAY) == ClockEventType.DEPARTURE
    clock(ClockEventType.BREAK_START, at(12))
    assert next_event.invoke("emp-1", MONDAY) == ClockEventType.BREAK_END
    clock(ClockEventType.BREAK_END, at(12, 20))
    clock(ClockEventType.DEPARTURE, at(17))
    assert next_event.invoke("emp-1", MONDAY) is None


def test_current_state_ignores_rejections(factory, clock):
    clock(ClockEventType.ARRIVAL, at(9), distance=0.9)

    assert factory.get_current_state().invoke("emp-1", MONDAY) == ClockState.NOT_STARTED


def test_clock_events_lists_the_whole_day(factory, clock):
    clock(ClockEventType.ARRIVAL, at(9), distance=0.9)
    clock(ClockEventType.ARRIVAL, at(9, 1))

    events = factory.get_clock_events().invoke("emp-1", MONDAY)

    assert [e.is_accepted for e in events] == [False, True]
    assert factory.get_clock_events().invoke("emp-1", date(2024, 3, 5)) == []


def test_identify_employee(factory, enrolled):
    enrolled("emp-1", [0.0, 0.0, 0.0, 0.0])
    enrolled("emp-2", [0.0, 1.0, 0.0, 0.0])

    result = factory.identify_employee().invoke(make_sample(0.05))

    assert result.employee_id == "emp-1"
    assert result.confidence == pytest.approx(0.95)


def test_identify_unknown_face(factory, enrolled):
    enrolled("emp-1", [0.0, 1.0, 0.0, 0.0])

    assert factory.identify_employee().invoke(make_sample(0.05)) is None
