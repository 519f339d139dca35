from typing import Optional

from attrs import define, field, validators

from ...model import CapturedSample, IdentificationResult
from ...repository import EnrollmentRepository
from ...service import DescriptorMatcher, UpstreamCaller
from ....utils import get_logger

logger = get_logger(__name__)


@define
class IdentifyEmployee:
    """Finds the enrolled employee closest to a sample, kiosk recognition mode."""

    enrollment_repository: EnrollmentRepository = field(
        validator=validators.instance_of(EnrollmentRepository)
    )
    descriptor_matcher: DescriptorMatcher = field(
        validator=validators.instance_of(DescriptorMatcher)
    )
    upstream_caller: UpstreamCaller = field(
        validator=validators.instance_of(UpstreamCaller)
    )

    def invoke(self, sample: CapturedSample) -> Optional[IdentificationResult]:
        identities = self.upstream_caller.call(
            "enrollment store", self.enrollment_repository.get_enrolled_identities
        )
        result = self.descriptor_matcher.identify(sample, identities)
        if result is None:
            logger.info("No enrolled identity above threshold among %d candidates", len(identities))
        else:
            logger.info(
                "Identified employee %s with confidence %.3f", result.employee_id, result.confidence
            )
        return result
