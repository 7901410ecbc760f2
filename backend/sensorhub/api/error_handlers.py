"""Error Handlers — global exception handlers for the SensorHub API.

Invariants:
    - SensorHubError → structured JSON with error code, message, severity
    - RequestValidationError → 400 in the InputValidationError envelope, with a
      client-facing summary of the first error plus field-level details
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (SensorHubError), validation (Pydantic), catch-all (Exception)
    - 4xx domain errors logged at WARNING, 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from sensorhub.core.errors import (
    ErrorSeverity, InputValidationError, SensorHubError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register SensorHub domain/infrastructure error handler."""

    @app.exception_handler(SensorHubError)
    async def sensorhub_error_handler(request: Request, exc: SensorHubError):
        """Handle all SensorHub domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"SensorHubError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "device_id": exc.context.device_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _summarize(errors: list[dict]) -> tuple[str, str]:
    """(message, field) describing the first schema error in client terms."""
    if not errors:
        return "Invalid request data", "body"
    first = errors[0]
    path = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    field = path[-1] if path else "body"
    kind = first.get("type", "")
    if kind == "json_invalid":
        return "Request body is not valid JSON", "body"
    if kind == "missing" and not path:
        return "Request body is required", "body"
    if kind in ("model_attributes_type", "dict_type"):
        return "Request body must be a JSON object", "body"
    return f"Invalid value for {field}", field


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Domain validation envelope plus per-field schema details."""
    errors = list(exc.errors())
    message, field = _summarize(errors)
    response = InputValidationError(message, field).to_response()
    response["error"]["details"] = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
    return response
