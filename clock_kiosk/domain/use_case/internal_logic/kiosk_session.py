from datetime import datetime
from typing import Optional

from ...errors import ClockKioskError, LivenessFailed, instruction_for
from ...model import ClockEvent, ClockEventType, IdentificationResult, Location
from ...service import FrameSource, LivenessVerifier
from ..add.request_clock_event import RequestClockEvent
from ..fetch.identify_employee import IdentifyEmployee
from .capture_sample import CaptureSample
from .liveness_monitor import LivenessMonitor
from ....utils import get_logger

logger = get_logger(__name__)


class KioskSession:
    """One camera serving one employee at a time.

    Every clock attempt yields a persisted clock event. Verification failures
    become rejected events and the session stays usable for a retry.
    """

    def __init__(
        self,
        frame_source: FrameSource,
        liveness_monitor: LivenessMonitor,
        capture_sample: CaptureSample,
        request_clock_event: RequestClockEvent,
        identify_employee: IdentifyEmployee,
    ):
        self.frame_source = frame_source
        self.liveness_monitor = liveness_monitor
        self.capture_sample = capture_sample
        self.request_clock_event = request_clock_event
        self.identify_employee = identify_employee

    @property
    def liveness(self) -> Optional[LivenessVerifier]:
        return self.liveness_monitor.verifier

    def activate_camera(self) -> LivenessVerifier:
        return self.liveness_monitor.start()

    def deactivate_camera(self) -> None:
        self.liveness_monitor.stop()

    def abort(self) -> None:
        """Discard the evidence gathered so far and start over."""
        self.liveness_monitor.renew()

    def instruction(self) -> str | None:
        verifier = self.liveness
        if verifier is None:
            return "Activate the camera"
        return verifier.instruction()

    def clock(
        self,
        employee_id: str,
        event_type: ClockEventType,
        location: Location | None = None,
        timestamp: datetime | None = None,
    ) -> ClockEvent:
        verifier = self.liveness
        try:
            if verifier is None or not verifier.is_live():
                raise LivenessFailed(self.instruction())
            sample = self.capture_sample.invoke(self.frame_source.read())
        except ClockKioskError as exc:
            return self.request_clock_event.reject(
                employee_id, event_type, exc, timestamp=timestamp, location=location
            )

        event = self.request_clock_event.invoke(
            employee_id,
            event_type,
            sample,
            verifier,
            timestamp=timestamp,
            location=location,
        )
        if event.is_accepted:
            self.liveness_monitor.renew()
        return event

    @staticmethod
    def feedback(event: ClockEvent) -> str | None:
        """Message for the employee after a clock attempt, None when accepted."""
        return instruction_for(event.rejection_reason)

    def identify(self) -> Optional[IdentificationResult]:
        sample = self.capture_sample.invoke(self.frame_source.read())
        return self.identify_employee.invoke(sample)
