"""App wiring: metrics exposure and the JSON log layer."""

import json
import logging

from fastapi.testclient import TestClient

from timetrack import create_app
from timetrack.core.config import AppSettings
from timetrack.core.logging import JsonLogFormatter, configure_logging
from timetrack.middlewares.request_id import principal_ctx_var, request_id_ctx_var


def test_metrics_are_exposed_when_enabled(engine):
    settings = AppSettings(DB_URL="sqlite://", BCRYPT_ROUNDS=4, METRICS_ENABLED=True)
    app = create_app(settings, engine=engine)

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "http_requests_total" in response.text
    assert 'handler="/health"' in response.text


def test_metrics_are_absent_when_disabled(client):
    assert client.get("/metrics").status_code == 404


def test_formatter_adds_service_request_and_user():
    formatter = JsonLogFormatter({"service": "TimeTrack", "env": "test"})
    record = logging.makeLogRecord(
        {"name": "timetrack.timers", "levelname": "INFO", "msg": "timer.created", "extra_data": {"timer_id": "t1"}}
    )
    request_token = request_id_ctx_var.set("req-1")
    user_token = principal_ctx_var.set("alice")
    try:
        payload = json.loads(formatter.format(record))
    finally:
        request_id_ctx_var.reset(request_token)
        principal_ctx_var.reset(user_token)

    assert payload["message"] == "timer.created"
    assert payload["service"] == "TimeTrack"
    assert payload["env"] == "test"
    assert payload["request_id"] == "req-1"
    assert payload["user"] == "alice"
    assert payload["timer_id"] == "t1"
    assert payload["timestamp"].endswith("Z")


def test_configure_logging_uses_settings():
    root = logging.getLogger()
    access = logging.getLogger("uvicorn.access")
    saved_handlers, saved_level, saved_disabled = list(root.handlers), root.level, access.disabled
    try:
        handler = configure_logging(AppSettings(APP_ENV="staging", LOG_LEVEL="warning"))

        assert root.handlers == [handler]
        assert root.level == logging.WARNING
        assert handler.formatter.static_fields == {"service": "TimeTrack", "env": "staging"}
        assert access.disabled is True
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
        access.disabled = saved_disabled
