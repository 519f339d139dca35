from .landmark_extractor import LandmarkExtractor
from .frame_source import FrameSource
from .liveness_verifier import LivenessVerifier
from .descriptor_matcher import DescriptorMatcher
from .upstream_caller import UpstreamCaller
from . import clock_state_machine

__all__ = [
    "LandmarkExtractor",
    "FrameSource",
    "LivenessVerifier",
    "DescriptorMatcher",
    "UpstreamCaller",
    "clock_state_machine",
]
