from pydantic import BaseModel, ConfigDict


class IdentificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: str
    confidence: float
