from zoneinfo import ZoneInfo

from environs import Env
from pydantic import BaseModel, Field


class KioskSettings(BaseModel):
    kiosk_id: str = "kiosk-1"
    timezone: str = "UTC"

    match_confidence_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    embedding_dimension: int = Field(default=128, gt=0)

    ear_closed_threshold: float = Field(default=0.21, gt=0.0)
    blink_consecutive_frames: int = Field(default=2, ge=1)
    movement_pixel_threshold: float = Field(default=2.0, gt=0.0)
    liveness_poll_interval: float = Field(default=0.1, gt=0.0)
    liveness_timeout_seconds: float = Field(default=30.0, ge=0.0)

    upstream_timeout_seconds: float = Field(default=5.0, gt=0.0)
    upstream_max_retries: int = Field(default=2, ge=0)

    database_path: str = "clock_kiosk.db"
    camera_index: int = 0
    camera_width: int = 640
    camera_height: int = 480

    log_level: str = "INFO"
    debug: bool = False

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls, path: str | None = None) -> "KioskSettings":
        env = Env()
        env.read_env(path)
        with env.prefixed("CLOCK_KIOSK_"):
            return cls(
                kiosk_id=env.str("KIOSK_ID", "kiosk-1"),
                timezone=env.str("TIMEZONE", "UTC"),
                match_confidence_threshold=env.float("MATCH_CONFIDENCE_THRESHOLD", 0.7),
                embedding_dimension=env.int("EMBEDDING_DIMENSION", 128),
                ear_closed_threshold=env.float("EAR_CLOSED_THRESHOLD", 0.21),
                blink_consecutive_frames=env.int("BLINK_CONSECUTIVE_FRAMES", 2),
                movement_pixel_threshold=env.float("MOVEMENT_PIXEL_THRESHOLD", 2.0),
                liveness_poll_interval=env.float("LIVENESS_POLL_INTERVAL", 0.1),
                liveness_timeout_seconds=env.float("LIVENESS_TIMEOUT_SECONDS", 30.0),
                upstream_timeout_seconds=env.float("UPSTREAM_TIMEOUT_SECONDS", 5.0),
                upstream_max_retries=env.int("UPSTREAM_MAX_RETRIES", 2),
                database_path=env.str("DATABASE_PATH", "clock_kiosk.db"),
                camera_index=env.int("CAMERA_INDEX", 0),
                camera_width=env.int("CAMERA_WIDTH", 640),
                camera_height=env.int("CAMERA_HEIGHT", 480),
                log_level=env.str("LOG_LEVEL", "INFO"),
                debug=env.bool("DEBUG", False),
            )
