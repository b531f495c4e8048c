# app_builder/api/generate.py
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from app_builder.core.chain import GenerationPipeline
from app_builder.models import CompletionFailure, ErrorCategory, ErrorResponse, GenerateResponse
from app_builder.utils.file_helpers import debug_enabled, save_debug_log

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_BODY_MESSAGE = "Invalid or missing request body."
SERVICE_UNAVAILABLE_MESSAGE = "Code generation service temporarily unavailable."
INTERNAL_ERROR_MESSAGE = "Internal Server Error"

STATUS_BY_CATEGORY: Dict[ErrorCategory, int] = {
    ErrorCategory.INVALID_INPUT: 400,
    ErrorCategory.EMPTY_OR_MALFORMED_RESPONSE: 502,
    ErrorCategory.AUTHENTICATION_FAILED: 500,
    ErrorCategory.RATE_LIMITED: 429,
    ErrorCategory.PROVIDER_ERROR: 503,
    ErrorCategory.TRANSPORT_ERROR: 503,
}

# client-facing text; provider details stay in the server logs
CLIENT_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.INVALID_INPUT: "Invalid specifications provided.",
    ErrorCategory.EMPTY_OR_MALFORMED_RESPONSE: "Failed to get valid response from generation service.",
    ErrorCategory.AUTHENTICATION_FAILED: "Internal server error during code generation. [Auth Issue]",
    ErrorCategory.RATE_LIMITED: "Rate limit exceeded. Please try again later.",
    ErrorCategory.PROVIDER_ERROR: SERVICE_UNAVAILABLE_MESSAGE,
    ErrorCategory.TRANSPORT_ERROR: SERVICE_UNAVAILABLE_MESSAGE,
}

_TEXT_FIELDS = ("appName", "description", "appDescription")
_FEATURE_FIELDS = ("features", "appFeatures")


def get_pipeline(request: Request) -> GenerationPipeline:
    return request.app.state.pipeline


def check_field_types(body: Dict[str, Any]) -> Optional[str]:
    """Return an error message if a known field has the wrong JSON type."""
    for key in _TEXT_FIELDS:
        if body.get(key) is not None and not isinstance(body[key], str):
            return f"Invalid type for {key}, expected string."
    for key in _FEATURE_FIELDS:
        # multi-line text is accepted alongside arrays
        if body.get(key) is not None and not isinstance(body[key], (list, str)):
            return f"Invalid type for {key}, expected array."
    return None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def failure_response(outcome: CompletionFailure) -> JSONResponse:
    return _error(STATUS_BY_CATEGORY[outcome.category], CLIENT_MESSAGES[outcome.category])


@router.post(
    "",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def generate(payload: Any = Body(None), pipeline: GenerationPipeline = Depends(get_pipeline)):
    if debug_enabled():
        save_debug_log("generate_incoming", {"body": payload})

    if not isinstance(payload, dict):
        return _error(400, INVALID_BODY_MESSAGE)
    type_error = check_field_types(payload)
    if type_error:
        return _error(400, type_error)

    # app-level exception handlers run outside CORSMiddleware
    try:
        outcome = await pipeline.run(payload)
    except Exception:
        logger.exception("Unexpected error in /api/generate route")
        return _error(500, INTERNAL_ERROR_MESSAGE)
    if isinstance(outcome, CompletionFailure):
        logger.error("Error in /api/generate route: %s", outcome.detail)
        return failure_response(outcome)
    return GenerateResponse(code=outcome.text)
