from functools import cached_property

from ..domain.service import DescriptorMatcher, LivenessVerifier, UpstreamCaller
from ..settings import KioskSettings


class Service:
    def __init__(self, settings: KioskSettings | None = None):
        self.settings = settings or KioskSettings.from_env()

    @cached_property
    def descriptor_matcher(self) -> DescriptorMatcher:
        return DescriptorMatcher(threshold=self.settings.match_confidence_threshold)

    @cached_property
    def upstream_caller(self) -> UpstreamCaller:
        return UpstreamCaller(
            timeout_seconds=self.settings.upstream_timeout_seconds,
            max_retries=self.settings.upstream_max_retries,
        )

    def new_liveness_verifier(self) -> LivenessVerifier:
        return LivenessVerifier.from_settings(self.settings)
