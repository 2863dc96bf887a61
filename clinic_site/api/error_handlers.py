# This file defines consistent API error payloads and exception handlers.
# It exists so every endpoint returns the same `{success, error, message}` envelope on failure.
# The handlers translate validation, HTTP, and unexpected failures into safe client messages.
# Centralized error handling prevents stack traces from leaking in production responses.

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from clinic_site.api.response_envelope import build_error_envelope

LOGGER = logging.getLogger("api")

GENERIC_FAILURE_MESSAGE = "Something went wrong! Please try again later."


class APIError(Exception):
    """Domain error type with a status code and an envelope label."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str, *, status_code: int | None = None, error: str | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        if error is not None:
            self.error = error
        self.message = message
        super().__init__(message)


class BadRequestError(APIError):
    status_code = 400
    error = "Bad Request"


class UnauthorizedError(APIError):
    status_code = 401
    error = "Unauthorized"


class ForbiddenError(APIError):
    status_code = 403
    error = "Forbidden"


class NotFoundError(APIError):
    status_code = 404
    error = "404 Not Found"


class ConflictError(APIError):
    status_code = 409
    error = "Conflict"


def format_validation_errors(errors: Any) -> str:
    """Join every violation message into one sentence list separated by `. `."""

    messages: list[str] = []
    for item in errors:
        message = str(item.get("msg", "")).strip()
        if item.get("type") == "missing" and tuple(item.get("loc", ())) == ("body",):
            message = "Request body is required."
        elif item.get("type") == "json_invalid":
            message = "Request body must be valid JSON."
        message = message.rstrip(".")
        if message and message not in messages:
            messages.append(message)
    if not messages:
        return "Invalid request."
    return ". ".join(messages) + "."


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=build_error_envelope(error=exc.error, message=exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=build_error_envelope(
                error=BadRequestError.error,
                message=format_validation_errors(exc.errors()),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        label = "404 Not Found" if exc.status_code == 404 else _reason_phrase(exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=build_error_envelope(error=label, message=str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.error(
            "Unhandled error on %s %s request_id=%s",
            request.method,
            request.url.path,
            getattr(request.state, "request_id", "unknown"),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_error_envelope(
                error="Internal Server Error",
                message=GENERIC_FAILURE_MESSAGE,
            ),
        )


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"
