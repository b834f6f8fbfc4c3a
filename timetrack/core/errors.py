"""Error taxonomy for the timer service and the handlers that render it.

Store and handler code raises the ``TimeTrackError`` subclasses below; the
handlers registered in ``create_app`` turn them into the JSON error envelope.
Login and signup never let ``ValidationError``/``ConflictError`` reach these
handlers: they answer with a redirect carrying an ``authError``/``signError``
query flag instead.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("timetrack.errors")


class TimeTrackError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "error"

    def __init__(self, message: str = "", *, details: Any | None = None) -> None:
        super().__init__(message or self.code)
        self.message = message or self.code
        self.details = details


class AuthenticationError(TimeTrackError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"


class ValidationError(TimeTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class ConflictError(TimeTrackError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class NotFoundError(TimeTrackError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class StorageError(TimeTrackError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "storage_error"


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


def envelope_for(exc: TimeTrackError) -> ErrorEnvelope:
    return ErrorEnvelope(status_code=exc.status_code, code=exc.code, message=exc.message, details=exc.details)


async def timetrack_exception_handler(request: Request, exc: TimeTrackError):
    if isinstance(exc, StorageError):
        logger.error(
            "storage.failed",
            exc_info=exc,
            extra={"extra_data": {"path": request.url.path, "method": request.method}},
        )
    return envelope_for(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if isinstance(detail, str):
        message = detail
    else:
        try:
            message = HTTPStatus(exc.status_code).phrase
        except ValueError:
            message = "Error"
    details = detail if isinstance(detail, dict) else None
    return ErrorEnvelope(
        status_code=exc.status_code,
        code="http_error",
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc):  # type: ignore[override]
    from fastapi.exceptions import RequestValidationError

    if isinstance(exc, RequestValidationError):
        return ErrorEnvelope(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Validation failed",
            details={"errors": exc.errors()},
        )
    raise exc
