"""
Prediction Gateway

Talks to the remote disease-prediction service. Every call is a single
request with a hard timeout: no retries, no backoff. Outcomes are returned as
one of the GatewayOutcome variants instead of raised, so callers can match on
them exhaustively.
"""

from datetime import UTC, datetime

import requests
import structlog

from healthcheck.config import AI_SERVICE_URL, HEALTH_TIMEOUT_SECONDS, PREDICT_TIMEOUT_SECONDS
from healthcheck.models.observation import SymptomSet
from healthcheck.models.prediction import (
    EmptySymptoms,
    GatewayOutcome,
    PredictionRequest,
    PredictionSuccess,
    RemoteError,
    ServiceHealth,
    ServiceUnavailable,
    TransportFailure,
)

logger = structlog.get_logger(__name__)


def _utc_timestamp() -> str:
    """ISO-8601 with millisecond precision and a trailing Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _is_connection_refused(exc: BaseException) -> bool:
    """Walk the exception chain looking for a refused TCP connection.

    requests wraps urllib3 errors, which keep the socket error either as
    ``__cause__``/``__context__`` or on a ``reason`` attribute.
    """
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, ConnectionRefusedError):
            return True
        for linked in (current.__cause__, current.__context__, getattr(current, "reason", None)):
            if isinstance(linked, BaseException):
                stack.append(linked)
        stack.extend(arg for arg in current.args if isinstance(arg, BaseException))
    return False


def _response_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text


class PredictionGateway:
    """Stateless client for the remote prediction service."""

    def __init__(
        self,
        base_url: str = AI_SERVICE_URL,
        predict_timeout: float = PREDICT_TIMEOUT_SECONDS,
        health_timeout: float = HEALTH_TIMEOUT_SECONDS,
    ) -> None:
        base = base_url.rstrip("/")
        # Accept the full predict URL as well as the service root
        if base.endswith("/predict"):
            base = base[: -len("/predict")]
        self.base_url = base
        self.predict_timeout = predict_timeout
        self.health_timeout = health_timeout
        self.logger = logger.bind(service_url=self.base_url)

    @property
    def predict_url(self) -> str:
        return f"{self.base_url}/predict"

    @property
    def health_url(self) -> str:
        return f"{self.base_url}/health"

    def predict(self, symptoms: SymptomSet) -> GatewayOutcome:
        if not symptoms:
            self.logger.info("prediction_rejected_empty_symptoms")
            return EmptySymptoms()

        body = PredictionRequest(symptoms=list(symptoms))
        try:
            response = requests.post(
                self.predict_url,
                json=body.model_dump(),
                timeout=self.predict_timeout,
                headers={"Content-Type": "application/json"},
            )
        except requests.Timeout as e:
            self.logger.error("prediction_timeout", timeout_seconds=self.predict_timeout, error=str(e))
            return TransportFailure(detail=str(e))
        except requests.ConnectionError as e:
            if _is_connection_refused(e):
                self.logger.error("prediction_service_unavailable", error=str(e))
                return ServiceUnavailable(detail=str(e))
            self.logger.error("prediction_connection_failed", error=str(e))
            return TransportFailure(detail=str(e))
        except requests.RequestException as e:
            self.logger.error("prediction_request_failed", error=str(e))
            return TransportFailure(detail=str(e))

        if not 200 <= response.status_code < 300:
            self.logger.warning("prediction_remote_error", status_code=response.status_code)
            return RemoteError(status_code=response.status_code, body=_response_body(response))

        try:
            payload = response.json()
        except ValueError as e:
            self.logger.error("prediction_invalid_json", error=str(e))
            return TransportFailure(detail=f"Invalid JSON from model service: {e}")

        self.logger.info("prediction_succeeded", symptoms=list(symptoms))
        return PredictionSuccess(payload=payload, timestamp=_utc_timestamp())

    def check_health(self) -> ServiceHealth:
        try:
            response = requests.get(self.health_url, timeout=self.health_timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            self.logger.warning("model_service_health_check_failed", error=str(e))
            return ServiceHealth(available=False, error=str(e))

        return ServiceHealth(available=True, payload=payload)


def get_gateway() -> PredictionGateway:
    """FastAPI dependency; tests override it with a gateway pointed elsewhere."""
    return PredictionGateway()
