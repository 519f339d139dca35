from typing import Sequence

from pydantic import BaseModel, ConfigDict, field_validator

Point = tuple[float, float]

LEFT_EYE_68 = range(36, 42)
RIGHT_EYE_68 = range(42, 48)
NOSE_TIP_68 = 30


class FaceLandmarks(BaseModel):
    """Landmarks the liveness checks rely on for a single face.

    Each eye holds six points in eye-aspect-ratio order: outer corner, two
    upper-lid points, inner corner, two lower-lid points.
    """

    model_config = ConfigDict(frozen=True)

    left_eye: tuple[Point, Point, Point, Point, Point, Point]
    right_eye: tuple[Point, Point, Point, Point, Point, Point]
    nose_tip: Point

    @classmethod
    def from_68_points(cls, points: Sequence[Sequence[float]]) -> "FaceLandmarks":
        if len(points) != 68:
            raise ValueError(f"Expected 68 landmark points, got {len(points)}")
        return cls(
            left_eye=tuple((float(points[i][0]), float(points[i][1])) for i in LEFT_EYE_68),
            right_eye=tuple((float(points[i][0]), float(points[i][1])) for i in RIGHT_EYE_68),
            nose_tip=(float(points[NOSE_TIP_68][0]), float(points[NOSE_TIP_68][1])),
        )


class FaceDetection(BaseModel):
    model_config = ConfigDict(frozen=True)

    landmarks: FaceLandmarks
    embedding: tuple[float, ...]

    @field_validator("embedding", mode="before")
    @classmethod
    def _to_tuple(cls, value):
        return tuple(float(v) for v in value)
