from .kiosk_factory import KioskFactory

__all__ = ["KioskFactory"]
