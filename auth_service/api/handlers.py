"""Exception handlers mapping service errors to JSON ``{"error": ...}`` bodies."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..domain.errors import AuthServiceError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def _error_response(exc: AuthServiceError) -> JSONResponse:
    """Render a service error as its status code and `{"error": message}` body."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_service_error(request: Request, exc: AuthServiceError) -> JSONResponse:
    """Return the generic message carried by a service error."""
    return _error_response(exc)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable or mistyped request bodies as missing fields."""
    # inputs may contain passwords; log locations only
    locations = [error.get("loc") for error in exc.errors()]
    logger.info("rejected malformed body on %s: %s", request.url.path, locations)
    return _error_response(ValidationError())


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """Log any other failure and answer with a generic 500."""
    logger.exception("unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": InternalError.default_message},
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register the service error handlers on ``app``."""
    app.add_exception_handler(AuthServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
