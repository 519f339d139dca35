from .logger import get_logger
from .geometry import eye_aspect_ratio, euclidean_distance, point_distance

__all__ = [
    "get_logger",
    "eye_aspect_ratio",
    "euclidean_distance",
    "point_distance",
]
