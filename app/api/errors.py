"""
app/api/errors.py

Error envelopes and exception handlers for the HTTP API.

Every failure leaves the API as ``{"success": false, "error": ..., "details": ...}``.
Routers raise ``api_error(...)``; the handlers registered here render it,
along with request-parsing failures and unexpected exceptions.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.esg_metric import ApiResponse

logger = logging.getLogger(__name__)


def error_envelope(
    error: str,
    *,
    details: Any = None,
    message: str | None = None,
) -> dict[str, Any]:
    return ApiResponse(success=False, error=error, details=details, message=message).model_dump(
        exclude_none=True
    )


def api_error(
    status_code: int,
    error: str,
    *,
    details: Any = None,
    message: str | None = None,
) -> HTTPException:
    """
    Build an HTTPException whose detail is the failure envelope.
    """

    return HTTPException(
        status_code=status_code,
        detail=error_envelope(error, details=details, message=message),
    )


def register_exception_handlers(application: FastAPI, *, expose_internal_errors: bool) -> None:
    """
    Render framework and unexpected errors as failure envelopes.
    """

    @application.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if isinstance(exc.detail, dict) and "success" in exc.detail:
            content = exc.detail
        else:
            content = error_envelope(str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @application.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body") or None,
                "message": error.get("msg", "Invalid request."),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_envelope("Validation failed", details=details),
        )

    @application.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error method=%s path=%s", request.method, request.url.path)
        details = str(exc) if expose_internal_errors else None
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope("Internal server error", details=details),
        )
