# This file defines consistent API error payloads and exception handlers.
# It exists so every endpoint returns the same error envelope with a request trace field.
# The handlers translate validation, lookup, storage, and unexpected failures into safe client messages.
# Storage failure details are logged here and never echoed to the client.

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pet_catalog.api.response_envelope import build_error_envelope
from pet_catalog.query.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "The server encountered an unexpected error."


class APIError(Exception):
    """Error with a status code and an already client-safe message."""

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.errors = errors
        super().__init__(message)


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    errors: list[dict[str, str]] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_error_envelope(
            status_code=status_code,
            message=message,
            request_id=_request_id(request),
            errors=errors,
        ),
    )


def _request_validation_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []
    for item in exc.errors():
        location = [str(part) for part in item.get("loc", ()) if part not in ("query", "path")]
        errors.append(
            {
                "field": ".".join(location) or "request",
                "reason": "invalid_type",
                "message": str(item.get("msg", "Invalid value.")),
            }
        )
    return errors


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return _error_response(
            request, status_code=exc.status_code, message=exc.message, errors=exc.errors
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(request, status_code=404, message=f"{exc.entity_label} not found.")

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.error(
            "Storage failure on %s %s (request_id=%s): %s",
            request.method,
            request.url.path,
            _request_id(request),
            exc,
            exc_info=exc,
        )
        return _error_response(request, status_code=500, message=GENERIC_SERVER_ERROR)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(
            request,
            status_code=400,
            message="Invalid request parameters.",
            errors=_request_validation_errors(exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(request, status_code=exc.status_code, message=str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s (request_id=%s)",
            request.method,
            request.url.path,
            _request_id(request),
            exc_info=exc,
        )
        return _error_response(request, status_code=500, message=GENERIC_SERVER_ERROR)
