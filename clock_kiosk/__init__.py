"""Face-verified attendance kiosk: liveness, descriptor matching and clock event sequencing."""

from .settings import KioskSettings

__version__ = "0.1.0"

__all__ = ["KioskSettings", "__version__"]
