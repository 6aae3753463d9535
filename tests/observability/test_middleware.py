"""Tests for the request observability middleware."""

import logging

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from standup_digest.observability.correlation import get_correlation_id
from standup_digest.observability.middleware import (
    CORRELATION_HEADER,
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

MIDDLEWARE_LOGGER = "standup_digest.observability.middleware"


def _last_record(caplog) -> logging.LogRecord:
    return [r for r in caplog.records if r.name == MIDDLEWARE_LOGGER][-1]


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    @app.get("/echo")
    async def echo() -> dict:
        return {"correlation_id": get_correlation_id()}

    @app.get("/missing")
    async def missing() -> dict:
        raise HTTPException(status_code=404, detail="nope")

    @app.get("/api/v1/health")
    async def health() -> dict:
        return {"status": "healthy"}

    return TestClient(app)


class TestCorrelationMiddleware:
    def test_incoming_id_bound_and_echoed(self, client: TestClient) -> None:
        response = client.get("/echo", headers={CORRELATION_HEADER: "req-9"})

        assert response.json() == {"correlation_id": "req-9"}
        assert response.headers[CORRELATION_HEADER] == "req-9"

    def test_id_generated_when_missing(self, client: TestClient) -> None:
        response = client.get("/echo")

        assert response.headers[CORRELATION_HEADER] == response.json()["correlation_id"]
        assert response.headers[CORRELATION_HEADER]

    def test_id_unbound_after_request(self, client: TestClient) -> None:
        client.get("/echo", headers={CORRELATION_HEADER: "req-10"})
        assert get_correlation_id() == ""


class TestRequestLoggingMiddleware:
    def test_success_logged_at_info(self, client: TestClient, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger=MIDDLEWARE_LOGGER):
            client.get("/echo")

        record = _last_record(caplog)
        assert record.levelno == logging.INFO
        assert record.status_code == 200
        assert record.path == "/echo"

    def test_client_error_logged_at_warning(self, client: TestClient, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger=MIDDLEWARE_LOGGER):
            client.get("/missing")

        assert _last_record(caplog).levelno == logging.WARNING

    def test_health_polls_logged_at_debug(self, client: TestClient, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger=MIDDLEWARE_LOGGER):
            client.get("/api/v1/health")

        assert _last_record(caplog).levelno == logging.DEBUG
