# willowbank/api/errors.py
"""
Translation of errors into the response envelope.

BadInput -> 400, NotFound -> 404, StoreError and anything unhandled -> 500.
Non-2xx responses carry the request path; 5xx responses also carry a
timestamp and hide the underlying message in production.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from willowbank.config.schema import WillowbankConfig
from willowbank.errors import WillowbankError
from willowbank.models.responses import ApiResponse
from willowbank.services.updates import utc_now

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal Server Error"


def error_response(
    request: Request, status_code: int, error: str, production: bool = False
) -> JSONResponse:
    """
    Build an error envelope.

    Args:
        request: Incoming request (for the path)
        status_code: HTTP status
        error: Underlying error message
        production: Suppress the message of 5xx errors
    """
    timestamp = None
    if status_code >= 500:
        timestamp = utc_now()
        if production:
            error = GENERIC_SERVER_ERROR

    body = ApiResponse(
        success=False, error=error, path=request.url.path, timestamp=timestamp
    ).to_dict()
    return JSONResponse(status_code=status_code, content=body)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    # Drop the "body" / "path" / "query" prefix
    loc = ".".join(str(part) for part in error.get("loc", ())[1:])
    msg = error.get("msg", "Invalid request")
    return f'"{loc}" {msg}' if loc else msg


def register_error_handlers(app: FastAPI, config: WillowbankConfig) -> None:
    """Install the exception handlers on the app."""
    production = config.is_production

    @app.exception_handler(WillowbankError)
    async def _willowbank_error(request: Request, exc: WillowbankError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc
            )
        return error_response(request, exc.status_code, exc.message, production)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(request, 400, _validation_message(exc), production)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return error_response(request, 404, "Route not found", production)
        return error_response(request, exc.status_code, str(exc.detail), production)

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc
        )
        return error_response(request, 500, str(exc) or type(exc).__name__, production)
