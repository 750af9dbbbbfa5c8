"""
Error response shape and logging helpers
"""
import json
import logging

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from historymap.core.error_handlers import ErrorHandler, setup_error_handlers
from historymap.core.exceptions import BackendError, RegistrationConflictError
from historymap.core.logging import JsonFormatter
from historymap.middleware import RequestContextMiddleware


class Body(BaseModel):
    name: str


def _app():
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    setup_error_handlers(app)

    @app.get("/backend")
    async def backend_failure():
        raise BackendError(503, "maintenance window")

    @app.get("/conflict")
    async def conflict():
        raise RegistrationConflictError("ana@example.org")

    @app.get("/http")
    async def http_failure():
        raise HTTPException(status_code=400, detail="Email and password are required")

    @app.post("/validate")
    async def validate(body: Body):
        return body

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    return app


def test_application_errors_use_error_field():
    client = TestClient(_app())
    resp = client.get("/backend", headers={"X-Request-ID": "req-1"})
    assert resp.status_code == 503
    body = resp.json()
    assert body["error"] == "maintenance window"
    assert body["error_code"] == "BACKEND_ERROR"
    assert body["details"] == {"backend_status": 503}
    assert body["request_id"] == "req-1"
    assert "timestamp" in body
    assert resp.headers["X-Request-ID"] == "req-1"


def test_conflict_and_http_exceptions():
    client = TestClient(_app())
    conflict = client.get("/conflict")
    assert conflict.status_code == 409
    assert conflict.json()["error"] == "Email already registered"

    http = client.get("/http")
    assert http.status_code == 400
    assert http.json()["error"] == "Email and password are required"
    assert http.json()["error_code"] == "VALIDATION_ERROR"

    missing = client.get("/nowhere")
    assert missing.status_code == 404
    assert missing.json()["error_code"] == "NOT_FOUND"


def test_validation_errors_list_fields():
    resp = TestClient(_app()).post("/validate", json={})
    assert resp.status_code == 422
    errors = resp.json()["details"]["validation_errors"]
    assert errors[0]["field"] == "body.name"


def test_unhandled_errors_are_opaque():
    client = TestClient(_app(), raise_server_exceptions=False)
    resp = client.get("/boom")
    assert resp.status_code == 500
    assert resp.json()["error"] == "Internal server error"


def test_error_statistics():
    handler = ErrorHandler()
    handler._track_error("BACKEND_ERROR")
    handler._track_error("BACKEND_ERROR")
    stats = handler.get_error_statistics()
    assert stats["error_counts"] == {"BACKEND_ERROR": 2}
    assert stats["total_errors"] == 2


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("historymap.test", logging.INFO, __file__, 1, "hello %s", ("map",), None)
    record.request_id = "req-9"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "hello map"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-9"
    assert "args" not in payload
