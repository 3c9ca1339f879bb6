from typing import Any

from pydantic import BaseModel, field_validator

from healthcheck.models.observation import SYMPTOM_VOCABULARY
from healthcheck.models.prediction import PredictionResult


class HistoryCreate(BaseModel):
    symptoms: list[str]
    vitals: dict[str, float] | None = None
    result: dict[str, Any]  # the "data" field of a successful /api/predict response

    @field_validator("symptoms")
    @classmethod
    def known_symptoms(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one symptom is required")
        unknown = sorted(set(v) - SYMPTOM_VOCABULARY)
        if unknown:
            raise ValueError(f"unknown symptoms: {', '.join(unknown)}")
        return v


class HistoryEntry(BaseModel):
    id: str
    user_id: str
    symptoms: list[str]
    vitals: dict[str, float] | None = None
    result: PredictionResult
    created_at: str

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def stringify(cls, v):
        return str(v)
