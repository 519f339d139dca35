from .capture_sample import CaptureSample
from .liveness_monitor import LivenessMonitor
from .kiosk_session import KioskSession

__all__ = [
    "CaptureSample",
    "LivenessMonitor",
    "KioskSession",
]
