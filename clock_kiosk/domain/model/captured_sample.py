from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CapturedSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    embedding: tuple[float, ...]
    captured_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("embedding", mode="before")
    @classmethod
    def _to_tuple(cls, value):
        return tuple(float(v) for v in value)

    @property
    def dimension(self) -> int:
        return len(self.embedding)
