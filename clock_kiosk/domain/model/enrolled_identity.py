from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EnrolledIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: str
    descriptor: tuple[float, ...]
    enrolled_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("descriptor", mode="before")
    @classmethod
    def _to_tuple(cls, value):
        return tuple(float(v) for v in value)

    def to_json(self):
        return {
            "employee_id": self.employee_id,
            "dimension": len(self.descriptor),
            "enrolled_at": self.enrolled_at.isoformat(),
        }
