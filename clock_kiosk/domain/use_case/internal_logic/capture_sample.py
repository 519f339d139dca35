from datetime import datetime, timezone

from attrs import define, field, validators

from ...errors import MultipleFacesDetected, NoFaceDetected
from ...model import CapturedSample
from ...service import LandmarkExtractor, UpstreamCaller
from ....utils import get_logger

logger = get_logger(__name__)


@define
class CaptureSample:
    landmark_extractor: LandmarkExtractor = field(
        validator=validators.instance_of(LandmarkExtractor)
    )
    upstream_caller: UpstreamCaller = field(
        validator=validators.instance_of(UpstreamCaller)
    )

    def invoke(self, frame, captured_at: datetime | None = None) -> CapturedSample:
        if frame is None:
            logger.warning("No frame available for capture")
            raise NoFaceDetected("No frame available")

        detections = self.upstream_caller.call(
            "landmark extractor", self.landmark_extractor.predict, frame
        )
        if not detections:
            logger.warning("Capture rejected: no face in frame")
            raise NoFaceDetected()
        if len(detections) > 1:
            logger.warning("Capture rejected: %d faces in frame", len(detections))
            raise MultipleFacesDetected()

        return CapturedSample(
            embedding=detections[0].embedding,
            captured_at=captured_at or datetime.now(timezone.utc),
        )
