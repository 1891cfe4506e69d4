"""
Error taxonomy and the HTTP translation layer.

Services raise the exceptions defined here; route handlers do not
catch them.  ``register_exception_handlers`` installs one handler per
error family on the application, and each handler turns the error
into a JSON envelope of the form::

    {"error": {"code": "not_found", "message": "Skill not found"}}

Server‑side failures (status 500) are logged with the message and the
source location that raised them, while the client only receives a
generic message.
"""

import logging
import sqlite3
import traceback
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_SERVER_MESSAGE = "The server could not complete the request."


class MentorAppError(Exception):
    """Base class for errors raised by the service layer."""

    code = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "", *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(MentorAppError):
    """Empty or malformed identifier, or a missing required field."""

    code = "invalid_input"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(MentorAppError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class DataAccessFailure(MentorAppError):
    """The underlying store rejected or failed a statement."""

    code = "data_access_failure"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class GenerationExhausted(MentorAppError):
    """No free identifier was found within the allowed attempts."""

    code = "generation_exhausted"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


def error_location(exc: BaseException) -> str:
    """Return ``file:line`` of the frame that raised ``exc``."""
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return "<unknown>"
    last = frames[-1]
    return f"{last.filename}:{last.lineno}"


def _log_server_error(request: Request, exc: BaseException, message: str) -> None:
    logger.warning(
        "%s: %s (%s %s)",
        message,
        error_location(exc),
        request.method,
        request.url.path,
    )


async def mentor_app_error_handler(request: Request, exc: MentorAppError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        _log_server_error(request, exc, exc.message or type(exc).__name__)
        message = GENERIC_SERVER_MESSAGE
    else:
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.code, message))


async def database_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
    """Wrap raw driver errors as ``DataAccessFailure``."""
    _log_server_error(request, exc, str(exc))
    return JSONResponse(
        status_code=DataAccessFailure.status_code,
        content=error_body(DataAccessFailure.code, GENERIC_SERVER_MESSAGE),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 ``invalid_input``."""
    errors = exc.errors()
    logger.info("Rejected request to %s: %d validation error(s)", request.url.path, len(errors))
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=InvalidInput.status_code,
        content=error_body(InvalidInput.code, message),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything the other handlers do not cover."""
    _log_server_error(request, exc, f"{type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=DataAccessFailure.status_code,
        content=error_body(DataAccessFailure.code, GENERIC_SERVER_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MentorAppError, mentor_app_error_handler)
    app.add_exception_handler(sqlite3.Error, database_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
