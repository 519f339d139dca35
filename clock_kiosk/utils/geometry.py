import numpy as np


def point_distance(a, b) -> float:
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def eye_aspect_ratio(eye) -> float:
    """Eye aspect ratio for six eye landmarks.

    Points are ordered outer corner, two upper-lid points, inner corner and
    two lower-lid points. The ratio drops towards zero as the eyelid closes.
    """
    points = np.asarray(eye, dtype=np.float64)
    if points.shape != (6, 2):
        raise ValueError(f"Expected 6 eye landmarks, got shape {points.shape}")

    vertical_a = np.linalg.norm(points[1] - points[5])
    vertical_b = np.linalg.norm(points[2] - points[4])
    horizontal = np.linalg.norm(points[0] - points[3])
    return float((vertical_a + vertical_b) / (2.0 * horizontal + 1e-6))


def euclidean_distance(a, b) -> float:
    first = np.asarray(a, dtype=np.float64)
    second = np.asarray(b, dtype=np.float64)
    if first.shape != second.shape:
        raise ValueError(
            f"Descriptor dimensionality mismatch: {first.shape} vs {second.shape}"
        )
    return float(np.linalg.norm(first - second))
