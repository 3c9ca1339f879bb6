from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class PredictionRequest(BaseModel):
    """Body sent to the remote prediction service."""

    symptoms: list[str]

    @field_validator("symptoms")
    @classmethod
    def non_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one symptom is required")
        return v


class DiagnosisCandidate(BaseModel):
    disease: str
    description: str = ""
    confidence: float = Field(ge=0, le=100)
    preventive: list[str] = []


class PredictionResult(BaseModel):
    predictions: list[DiagnosisCandidate] = []


# ── Gateway outcomes ──
# Exactly one of these is returned per predict() call.


class EmptySymptoms(BaseModel):
    kind: Literal["empty_symptoms"] = "empty_symptoms"


class PredictionSuccess(BaseModel):
    kind: Literal["success"] = "success"
    payload: Any
    timestamp: str  # ISO-8601, UTC


class RemoteError(BaseModel):
    kind: Literal["remote_error"] = "remote_error"
    status_code: int
    body: Any  # remote error payload, untouched


class ServiceUnavailable(BaseModel):
    kind: Literal["unavailable"] = "unavailable"
    detail: str


class TransportFailure(BaseModel):
    kind: Literal["transport_failure"] = "transport_failure"
    detail: str


GatewayOutcome = (
    EmptySymptoms | PredictionSuccess | RemoteError | ServiceUnavailable | TransportFailure
)


class ServiceHealth(BaseModel):
    available: bool
    payload: Any = None
    error: str | None = None
