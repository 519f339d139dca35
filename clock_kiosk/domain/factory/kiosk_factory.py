from ...di.repository import InMemoryRepository, Repository
from ...di.service import Service
from ..service import FrameSource, LandmarkExtractor
from ..use_case import (
    CaptureSample,
    EnrollEmployee,
    EnrollFromFrame,
    GetClockEvents,
    GetCurrentState,
    GetNextEventType,
    IdentifyEmployee,
    KioskSession,
    LivenessMonitor,
    RequestClockEvent,
    RevokeEnrollment,
)


class KioskFactory:
    def __init__(
        self,
        service: Service,
        repository: Repository | InMemoryRepository,
    ):
        self.service = service
        self.repository = repository
        self.settings = service.settings

    def request_clock_event(self) -> RequestClockEvent:
        return RequestClockEvent(
            enrollment_repository=self.repository.enrollment_repository,
            clock_event_repository=self.repository.clock_event_repository,
            shift_window_repository=self.repository.shift_window_repository,
            audit_log_repository=self.repository.audit_log_repository,
            descriptor_matcher=self.service.descriptor_matcher,
            upstream_caller=self.service.upstream_caller,
            settings=self.settings,
        )

    def enroll_employee(self) -> EnrollEmployee:
        return EnrollEmployee(
            enrollment_repository=self.repository.enrollment_repository,
            audit_log_repository=self.repository.audit_log_repository,
            upstream_caller=self.service.upstream_caller,
            embedding_dimension=self.settings.embedding_dimension,
        )

    def enroll_from_frame(self, landmark_extractor: LandmarkExtractor) -> EnrollFromFrame:
        return EnrollFromFrame(
            capture_sample=self.capture_sample(landmark_extractor),
            enroll_employee=self.enroll_employee(),
        )

    def revoke_enrollment(self) -> RevokeEnrollment:
        return RevokeEnrollment(
            enrollment_repository=self.repository.enrollment_repository,
            audit_log_repository=self.repository.audit_log_repository,
            upstream_caller=self.service.upstream_caller,
        )

    def get_current_state(self) -> GetCurrentState:
        return GetCurrentState(clock_event_repository=self.repository.clock_event_repository)

    def get_next_event_type(self) -> GetNextEventType:
        return GetNextEventType(get_current_state=self.get_current_state())

    def get_clock_events(self) -> GetClockEvents:
        return GetClockEvents(clock_event_repository=self.repository.clock_event_repository)

    def identify_employee(self) -> IdentifyEmployee:
        return IdentifyEmployee(
            enrollment_repository=self.repository.enrollment_repository,
            descriptor_matcher=self.service.descriptor_matcher,
            upstream_caller=self.service.upstream_caller,
        )

    def capture_sample(self, landmark_extractor: LandmarkExtractor) -> CaptureSample:
        return CaptureSample(
            landmark_extractor=landmark_extractor,
            upstream_caller=self.service.upstream_caller,
        )

    def kiosk_session(
        self, frame_source: FrameSource, landmark_extractor: LandmarkExtractor
    ) -> KioskSession:
        monitor = LivenessMonitor(
            frame_source=frame_source,
            landmark_extractor=landmark_extractor,
            upstream_caller=self.service.upstream_caller,
            verifier_factory=self.service.new_liveness_verifier,
            interval=self.settings.liveness_poll_interval,
        )
        return KioskSession(
            frame_source=frame_source,
            liveness_monitor=monitor,
            capture_sample=self.capture_sample(landmark_extractor),
            request_clock_event=self.request_clock_event(),
            identify_employee=self.identify_employee(),
        )
