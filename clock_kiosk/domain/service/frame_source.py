from abc import ABC, abstractmethod


class FrameSource(ABC):
    @abstractmethod
    def read(self):
        """Return the latest frame, or None when no frame is available."""
        raise NotImplementedError("Implement read method")

    def release(self) -> None:
        pass
