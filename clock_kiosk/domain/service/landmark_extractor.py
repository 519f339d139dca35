from abc import ABC, abstractmethod

from ..model import FaceDetection


class LandmarkExtractor(ABC):
    @abstractmethod
    def predict(self, frame) -> list[FaceDetection]:
        """Detect every face in the frame with its landmarks and embedding."""
        raise NotImplementedError("Implement predict method")
