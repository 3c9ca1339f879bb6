import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from healthcheck.diagnosis.normalizer import normalize_symptoms
from healthcheck.diagnosis.presenter import error_message
from healthcheck.diagnosis.validator import parse_observation, validate_health_data
from healthcheck.models.observation import EXAMPLE_HEALTH_DATA
from healthcheck.models.prediction import (
    EmptySymptoms,
    PredictionSuccess,
    RemoteError,
    ServiceUnavailable,
    TransportFailure,
)
from healthcheck.services.prediction_gateway import PredictionGateway, get_gateway

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.post("")
async def predict(request: Request, gateway: PredictionGateway = Depends(get_gateway)):
    """Validate health data, forward its symptoms to the model and relay the answer."""
    # Malformed JSON or a non-object body counts as missing health data
    try:
        body = await request.json()
    except ValueError:
        body = None
    health_data = body.get("healthData") if isinstance(body, dict) else None
    reason = validate_health_data(health_data)
    if reason is not None:
        logger.info("health_data_rejected", reason=reason)
        return JSONResponse(
            status_code=400,
            content={"message": reason, "example": EXAMPLE_HEALTH_DATA},
        )

    symptoms = normalize_symptoms(parse_observation(health_data))
    logger.info("symptoms_normalized", symptoms=list(symptoms))

    outcome = await run_in_threadpool(gateway.predict, symptoms)
    message = error_message(outcome)

    match outcome:
        case PredictionSuccess(payload=payload, timestamp=timestamp):
            return {"success": True, "data": payload, "timestamp": timestamp}
        case EmptySymptoms():
            return JSONResponse(status_code=400, content={"message": message})
        case ServiceUnavailable():
            return JSONResponse(
                status_code=503,
                content={"message": message, "error": "CONNECTION_REFUSED"},
            )
        case RemoteError(status_code=status_code, body=remote_body):
            return JSONResponse(
                status_code=status_code,
                content={"message": message, "error": remote_body},
            )
        case TransportFailure(detail=detail):
            return JSONResponse(status_code=500, content={"message": message, "error": detail})


@router.get("/health")
def model_health(gateway: PredictionGateway = Depends(get_gateway)):
    """Report whether the remote model service answers its health check."""
    health = gateway.check_health()
    if health.available:
        return {"backend": "healthy", "model_service": health.payload}
    return JSONResponse(
        status_code=503,
        content={"backend": "healthy", "model_service": "unavailable", "error": health.error},
    )
