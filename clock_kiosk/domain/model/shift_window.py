from datetime import time

from pydantic import BaseModel, ConfigDict, Field


class ShiftWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    expected_entry: time
    expected_exit: time | None = None
    tolerance_minutes: int = Field(default=0, ge=0)
