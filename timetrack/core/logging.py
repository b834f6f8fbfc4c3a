"""JSON logging for the timer service.

Every record carries the service name and environment, plus the request id
and logged-in username when a request is in flight. Uvicorn's own loggers are
routed through the same handler; its access log is muted because
``RequestIdMiddleware`` already emits ``request.completed`` per request.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from ..middlewares.request_id import principal_ctx_var, request_id_ctx_var
from .config import AppSettings

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error")


class JsonLogFormatter(logging.Formatter):
    def __init__(self, static_fields: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self.static_fields,
        }
        request_id = request_id_ctx_var.get()
        if request_id:
            payload["request_id"] = request_id
        username = principal_ctx_var.get()
        if username:
            payload["user"] = username
        extra = getattr(record, "extra_data", None)
        if isinstance(extra, Mapping):
            payload.update(extra)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), default=str)


def configure_logging(settings: AppSettings) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter({"service": settings.APP_NAME, "env": settings.APP_ENV}))
    logging.root.handlers = [handler]
    logging.root.setLevel(settings.LOG_LEVEL.upper())

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True
    logging.getLogger("uvicorn.access").disabled = True
    return handler
