"""Tests for correlation id handling and error rendering."""

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from tenantkit.entrypoints.api.middleware.correlation import (
    CORRELATION_HEADER,
    CorrelationIdMiddleware,
)


class TestCorrelationId:
    """Tests for correlation id propagation."""

    def test_echoes_incoming_id(self, client: TestClient) -> None:
        """An incoming id is echoed on the response and in the envelope."""
        response = client.post(
            "/api/v1/search",
            json={"searchQuery": "guide"},
            headers={CORRELATION_HEADER: "corr-123"},
        )

        assert response.headers[CORRELATION_HEADER] == "corr-123"
        assert response.json()["correlationId"] == "corr-123"

    def test_generates_id(self, client: TestClient) -> None:
        """A fresh id is generated when none is supplied."""
        response = client.get("/health")

        assert len(response.headers[CORRELATION_HEADER]) == 36

    def test_error_bodies_carry_id(self, client: TestClient) -> None:
        """Error envelopes include the correlation id."""
        response = client.get("/api/v1/users", headers={CORRELATION_HEADER: "corr-err"})

        assert response.status_code == 401
        assert response.json()["correlationId"] == "corr-err"


class TestCancellation:
    """Tests for cancelled downstream work."""

    def test_inner_cancellation_is_499(self, app: FastAPI) -> None:
        """A cancelled operation inside a live request maps to 499."""

        @app.get("/slow")
        async def slow() -> None:
            inner = asyncio.ensure_future(asyncio.sleep(10))
            asyncio.get_running_loop().call_soon(inner.cancel)
            await inner

        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/slow", headers={CORRELATION_HEADER: "corr-123"})

        assert response.status_code == 499
        body = response.json()
        assert body["errorCode"] == "REQUEST_CANCELLED"
        assert body["correlationId"] == "corr-123"
        assert response.headers[CORRELATION_HEADER] == "corr-123"

    async def test_aborted_request_reraises(self) -> None:
        """Cancelling the request task itself propagates and sends nothing."""
        sent: list[dict] = []

        async def endpoint(scope, receive, send) -> None:  # type: ignore[no-untyped-def]
            await asyncio.sleep(10)

        async def receive() -> dict:
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message: dict) -> None:
            sent.append(message)

        middleware = CorrelationIdMiddleware(endpoint)
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/api/v1/search",
            "headers": [],
            "query_string": b"",
        }
        task = asyncio.create_task(middleware(scope, receive, send))
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert sent == []


class TestUnhandledErrors:
    """Tests for the catch-all error handler."""

    def _boom_client(self, app: FastAPI) -> TestClient:
        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("database exploded")

        return TestClient(app, raise_server_exceptions=False)

    def test_development_shows_detail(self, app: FastAPI) -> None:
        """Outside production the message is passed through."""
        app.state.settings.app_env = "development"

        response = self._boom_client(app).get("/boom", headers={CORRELATION_HEADER: "corr-500"})

        assert response.status_code == 500
        assert response.headers[CORRELATION_HEADER] == "corr-500"
        body = response.json()
        assert body["errorCode"] == "INTERNAL_SERVER_ERROR"
        assert body["message"] == "database exploded"
        assert body["correlationId"] == "corr-500"

    def test_production_hides_detail(self, app: FastAPI) -> None:
        """In production only a generic message is returned."""
        app.state.settings.app_env = "production"

        response = self._boom_client(app).get("/boom")

        assert response.status_code == 500
        assert "exploded" not in response.text
        assert CORRELATION_HEADER in response.headers
