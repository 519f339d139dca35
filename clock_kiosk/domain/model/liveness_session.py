from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from .face_landmarks import FaceLandmarks


class LivenessSession(BaseModel):
    session_id: UUID = Field(default_factory=uuid4)
    blink_detected: bool = False
    blink_at: float | None = None
    movement_detected: bool = False
    movement_at: float | None = None
    face_count: int = 0
    previous_landmarks: FaceLandmarks | None = None
    closed_eye_frames: int = 0
    frames_observed: int = 0
    started_at: float = 0.0
    closed: bool = False
