"""
Result presentation.

Turns a prediction payload into the view the frontend renders, and maps each
gateway failure to the message shown to the user. Rendering itself lives in
the web client; this module only fixes what it receives.
"""

from typing import Any, Literal, assert_never

from pydantic import BaseModel

from healthcheck.models.prediction import (
    DiagnosisCandidate,
    EmptySymptoms,
    GatewayOutcome,
    PredictionResult,
    PredictionSuccess,
    RemoteError,
    ServiceUnavailable,
    TransportFailure,
)

# Candidates above this confidence (percent) are emphasised
HIGHLIGHT_THRESHOLD = 70

MEDICAL_NOTICE = (
    "This is an AI-based preliminary analysis and should not replace professional medical advice. "
    "Please consult with a healthcare provider for proper diagnosis and treatment."
)
NO_MATCH_GUIDANCE = (
    "We couldn't find a strong match for your symptoms. This doesn't mean nothing is wrong - "
    "we recommend consulting with a healthcare professional for a proper evaluation."
)


class CandidateView(BaseModel):
    disease: str
    description: str
    confidence: float
    preventive: list[str]
    highlighted: bool


class ResultView(BaseModel):
    state: Literal["results", "no_match"]
    candidates: list[CandidateView] = []
    message: str


def parse_result(payload: Any) -> PredictionResult:
    """Read the candidates out of a remote payload; no list means no candidates."""
    if isinstance(payload, dict) and isinstance(payload.get("predictions"), list):
        return PredictionResult.model_validate({"predictions": payload["predictions"]})
    return PredictionResult()


def _candidate_view(candidate: DiagnosisCandidate) -> CandidateView:
    return CandidateView(
        **candidate.model_dump(),
        highlighted=candidate.confidence > HIGHLIGHT_THRESHOLD,
    )


def present_result(result: PredictionResult) -> ResultView:
    if not result.predictions:
        return ResultView(state="no_match", message=NO_MATCH_GUIDANCE)
    return ResultView(
        state="results",
        candidates=[_candidate_view(c) for c in result.predictions],
        message=MEDICAL_NOTICE,
    )


def error_message(outcome: GatewayOutcome) -> str | None:
    """User-facing message for a failed outcome; None for a success."""
    match outcome:
        case PredictionSuccess():
            return None
        case EmptySymptoms():
            return "No symptoms detected in health data"
        case ServiceUnavailable():
            return (
                "AI model service is not available. "
                "Please make sure the model server is running."
            )
        case RemoteError():
            return "AI model returned an error"
        case TransportFailure():
            return "AI Prediction Service Error"
        case _:
            assert_never(outcome)
