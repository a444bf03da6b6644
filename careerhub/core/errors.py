"""
Application errors and the FastAPI handlers that normalize them.

Every error response has the same shape:
    {"error": {"code": ..., "message": ..., "request_id": ...}, "detail": message}
and carries the x-request-id header.
"""

import logging
from typing import Optional
from uuid import uuid4

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

from careerhub.core.logging import LOGGER_NAME, get_request_id

logger = logging.getLogger(LOGGER_NAME)


class AppError(Exception):
    """Base for errors that map to a specific HTTP status and error code."""

    code = "app_error"
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        request_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.code
        self.status_code = status_code or self.status_code
        self.request_id = request_id


class ValidationError(AppError, ValueError):
    """Bad input: unknown category, blank user id, invalid limit, ..."""

    code = "validation_error"
    status_code = 400


class NotFoundError(AppError, LookupError):
    code = "not_found"
    status_code = 404


class UnauthorizedError(AppError):
    code = "unauthorized"
    status_code = 401


def _request_id_for(request: Request) -> str:
    return getattr(request.state, "request_id", None) or get_request_id() or str(uuid4())


def _error_response(rid: str, status_code: int, code: str, message: str) -> JSONResponse:
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": {"code": code, "message": message, "request_id": rid},
            "detail": message,
        },
    )
    response.headers["x-request-id"] = rid
    return response


async def app_error_handler(request: Request, exc: AppError):
    rid = exc.request_id or _request_id_for(request)
    logger.log(
        logging.ERROR if exc.status_code >= 500 else logging.WARNING,
        "app.error",
        extra={"request_id": rid, "error_code": exc.code, "status": exc.status_code},
    )
    return _error_response(rid, exc.status_code, exc.code, exc.message)


async def http_error_handler(request: Request, exc: HTTPException):
    rid = _request_id_for(request)
    code = "not_found" if exc.status_code == 404 else "http_error"
    logger.warning("http.error", extra={"request_id": rid, "error_code": code, "status": exc.status_code})
    return _error_response(rid, exc.status_code, code, str(exc.detail or "HTTP error"))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report the first failing field as `loc: msg` with a 400."""
    rid = _request_id_for(request)
    errors = exc.errors()
    message = "invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", message)
        if location:
            message = f"{location}: {message}"
    logger.warning(
        "request.invalid",
        extra={"request_id": rid, "error_code": ValidationError.code, "status": 400},
    )
    return _error_response(rid, 400, ValidationError.code, message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = _request_id_for(request)
    logger.error(
        "unhandled.exception",
        exc_info=exc,
        extra={"request_id": rid, "error_code": "internal_error", "status": 500},
    )
    return _error_response(rid, 500, "internal_error", "Unexpected error")
