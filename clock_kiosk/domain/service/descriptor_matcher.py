from typing import Iterable, Optional

from ..errors import NotEnrolled
from ..model import CapturedSample, EnrolledIdentity, IdentificationResult
from ...utils import euclidean_distance, get_logger

logger = get_logger(__name__)


class DescriptorMatcher:
    """Scores a captured embedding against an enrolled descriptor.

    ``confidence = max(0, 1 - euclidean_distance)``. The transform is
    monotonic in the distance, it is not a calibrated probability.
    """

    def __init__(self, threshold: float):
        self.threshold = threshold

    def match(self, sample: CapturedSample, enrolled: Optional[EnrolledIdentity]) -> float:
        if enrolled is None:
            raise NotEnrolled()
        distance = euclidean_distance(sample.embedding, enrolled.descriptor)
        confidence = max(0.0, 1.0 - distance)
        logger.debug(
            "Employee %s: distance %.4f, confidence %.4f",
            enrolled.employee_id,
            distance,
            confidence,
        )
        return confidence

    def is_accepted(self, confidence: float) -> bool:
        return confidence >= self.threshold

    def identify(
        self, sample: CapturedSample, identities: Iterable[EnrolledIdentity]
    ) -> Optional[IdentificationResult]:
        best: Optional[IdentificationResult] = None
        for identity in identities:
            confidence = self.match(sample, identity)
            if not self.is_accepted(confidence):
                continue
            if best is None or confidence > best.confidence:
                best = IdentificationResult(employee_id=identity.employee_id, confidence=confidence)
        return best
