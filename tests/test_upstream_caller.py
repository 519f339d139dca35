import threading
import time

import pytest

from clock_kiosk.domain.errors import UpstreamTimeout
from clock_kiosk.domain.service import UpstreamCaller


@pytest.fixture
def release():
    event = threading.Event()
    yield event
    event.set()


@pytest.fixture
def caller():
    return UpstreamCaller(timeout_seconds=0.05, max_retries=1)


def test_returns_result(caller):
    assert caller.call("adder", lambda a, b: a + b, 2, b=3) == 5


def test_retries_then_raises_upstream_timeout(caller, release, caplog):
    calls = []

    def hung():
        calls.append(1)
        release.wait(5)

    with pytest.raises(UpstreamTimeout):
        caller.call("slow store", hung)

    assert len(calls) == 2
    assert "slow store did not respond after 2 attempts" in caplog.text


def test_errors_from_the_call_propagate(caller):
    def broken():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        caller.call("broken", broken)


def test_hung_collaborator_does_not_block_healthy_ones(release):
    caller = UpstreamCaller(timeout_seconds=0.05, max_retries=2)

    with pytest.raises(UpstreamTimeout):
        caller.call("hung store", release.wait, 5)

    assert caller.call("healthy extractor", lambda: "ok") == "ok"
    assert caller.pending("hung store") == 3


def test_calls_fail_fast_once_too_many_are_hanging(release):
    caller = UpstreamCaller(timeout_seconds=0.05, max_retries=0, max_pending=2)
    calls = []

    def hung():
        calls.append(1)
        release.wait(5)

    for _ in range(2):
        with pytest.raises(UpstreamTimeout):
            caller.call("hung store", hung)
    with pytest.raises(UpstreamTimeout):
        caller.call("hung store", hung)

    assert len(calls) == 2


def test_pending_count_drops_when_hung_call_returns(release):
    caller = UpstreamCaller(timeout_seconds=0.05, max_retries=0)
    finished = threading.Event()

    def hung():
        release.wait(5)
        finished.set()

    with pytest.raises(UpstreamTimeout):
        caller.call("hung store", hung)
    assert caller.pending("hung store") == 1

    release.set()
    assert finished.wait(1)
    # the counter is decremented right after the call returns
    for _ in range(100):
        if caller.pending("hung store") == 0:
            break
        time.sleep(0.01)
    assert caller.pending("hung store") == 0
