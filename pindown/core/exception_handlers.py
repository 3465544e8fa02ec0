"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the error envelope
{success: false, error: {code, type, message, details?, timestamp}}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pindown.core.config import get_settings
from pindown.domain.exceptions import PinDownException
from pindown.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Map domain error_type to HTTP status
_ERROR_TYPE_STATUS: dict[str, int] = {
    "authentication": 401,
    "authorization": 403,
    "validation": 400,
    "not_found": 404,
    "conflict": 409,
    "server": 500,
}

# Framework HTTP errors: status -> (code, type)
_HTTP_STATUS_ERROR: dict[int, tuple[str, str]] = {
    401: ("AUTH_REQUIRED", "authentication"),
    403: ("PERMISSION_DENIED", "authorization"),
    404: ("RESOURCE_NOT_FOUND", "not_found"),
    405: ("METHOD_NOT_ALLOWED", "validation"),
    503: ("SERVICE_UNAVAILABLE", "server"),
}


def error_envelope(body: dict[str, Any]) -> dict[str, Any]:
    """Wrap an error body with success=false and a timestamp."""
    return {
        "success": False,
        "error": {**body, "timestamp": utc_now().isoformat()},
    }


def _pindown_exception_handler(request: Request, exc: PinDownException) -> JSONResponse:
    """Return the envelope from PinDownException.to_dict() with the mapped status."""
    status = _ERROR_TYPE_STATUS.get(exc.error_type, 500)
    body = exc.to_dict()
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.details)
        if not get_settings().debug:
            body.pop("details", None)
    return JSONResponse(status_code=status, content=error_envelope(body))


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 VALIDATION_FAILED with field errors."""
    return JSONResponse(
        status_code=400,
        content=error_envelope(
            {
                "code": "VALIDATION_FAILED",
                "type": "validation",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            }
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return the envelope for Starlette HTTP exceptions (status + detail)."""
    code, error_type = _HTTP_STATUS_ERROR.get(exc.status_code, ("HTTP_ERROR", "server"))
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(
            {"code": code, "type": error_type, "message": str(exc.detail)}
        ),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    body: dict[str, Any] = {
        "code": "INTERNAL_ERROR",
        "type": "server",
        "message": "Internal server error",
    }
    if get_settings().debug:
        body["details"] = {"reason": str(exc)}
    return JSONResponse(status_code=500, content=error_envelope(body))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: PinDownException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(PinDownException, _pindown_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
