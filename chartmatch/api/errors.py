"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit une gestion centralisée des erreurs avec des enveloppes standardisées, des codes
d'erreur cohérents et le `request_id` de la requête pour le suivi.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from chartmatch.core.http_constants import HTTP_UNPROCESSABLE_ENTITY

log = structlog.get_logger(__name__)

ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
}


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None
    details: Any = None


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: Any = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Extract the request id set by the middleware, or the incoming header."""
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id
    return request.headers.get("X-Request-ID")


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standard envelope."""
    code = ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    trace_id = extract_trace_id(request)
    log.warning(
        "http_exception",
        code=code,
        status_code=exc.status_code,
        error_message=str(exc.detail),
        trace_id=trace_id,
    )
    return create_error_response(
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        trace_id=trace_id,
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body validation errors with standard envelope."""
    trace_id = extract_trace_id(request)
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    log.info("request_validation_failed", errors=len(errors), trace_id=trace_id)
    return create_error_response(
        status_code=HTTP_UNPROCESSABLE_ENTITY,
        code=ERROR_CODES[HTTP_UNPROCESSABLE_ENTITY],
        message="Request validation failed",
        trace_id=trace_id,
        details={"errors": errors},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on the application."""
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
