"""Mapping of generation failures onto ``{error, details}`` JSON bodies."""

import logging
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from content_generator.application.schemas import ErrorResponse
from content_generator.domain.exceptions import ContentGenerationError, TransportError

logger = logging.getLogger(__name__)

MISSING_TOPIC_MESSAGE = "Please enter a topic"


def error_response(status_code: int, error: str, details: Any = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def generation_error_response(exc: ContentGenerationError) -> JSONResponse:
    """Upstream and parsing failures are reported as 500 with diagnostics."""
    if isinstance(exc, TransportError):
        logger.error("Completion provider failed: %s", exc)
    else:
        logger.error("Generation failed: %s", exc.message)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, exc.details
    )


def missing_topic_response() -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, MISSING_TOPIC_MESSAGE)
