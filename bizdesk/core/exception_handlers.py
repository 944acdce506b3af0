"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain, Firebase and
framework exceptions to JSON responses of the form
{"error": ..., "message": ..., "details": ...}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bizdesk.core.config import get_settings
from bizdesk.domain.exceptions import BizdeskException
from bizdesk.infrastructure.exceptions import FirebaseAuthError

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "TENANT_NOT_FOUND": 404,
    "RESOURCE_ALREADY_EXISTS": 409,
    "DOCUMENT_EXISTS": 409,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "VALIDATION_ERROR": 400,
    "FIRESTORE_NOT_CONFIGURED": 503,
    "INVALID_DOCUMENT_ID": 404,
}

# Identity Toolkit codes; anything else is a 400.
_AUTH_CODE_STATUS: dict[str, int] = {
    "EMAIL_EXISTS": 409,
    "EMAIL_NOT_FOUND": 401,
    "INVALID_PASSWORD": 401,
    "INVALID_LOGIN_CREDENTIALS": 401,
    "INVALID_ID_TOKEN": 401,
    "USER_DISABLED": 403,
    "TOO_MANY_ATTEMPTS_TRY_LATER": 429,
}


def status_for(exc: BizdeskException) -> int:
    """HTTP status for a domain or infrastructure exception."""
    if isinstance(exc, FirebaseAuthError):
        return _AUTH_CODE_STATUS.get(exc.code, 400)
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _bizdesk_exception_handler(request: Request, exc: BizdeskException) -> JSONResponse:
    """Return JSON from BizdeskException.to_dict() with the mapped status code."""
    status = status_for(exc)
    if status >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    return JSONResponse(status_code=status, content=jsonable_encoder(exc.to_dict()))


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail, "details": {}},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail, "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app. Call once after creating it."""
    app.add_exception_handler(BizdeskException, _bizdesk_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
