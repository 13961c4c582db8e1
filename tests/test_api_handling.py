"""
Tests for the HTTP integration.

Builds the application with create_app, mounts throwaway routes that
raise, and checks the responses produced by the middleware.
"""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from faultmap.core.config import Settings
from faultmap.domain.handling.configuration import ConfigurationBuilder
from faultmap.domain.handling.entities import BehaviorKind
from faultmap.domain.handling.errors import CoreError
from faultmap.main import create_app


class InsufficientFundsError(CoreError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__("Insufficient funds")
        self.required = required
        self.available = available


class OrderNotFoundError(LookupError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


def mount_routes(app: FastAPI) -> FastAPI:
    @app.get("/funds")
    def funds() -> dict:
        raise InsufficientFundsError(required=100, available=5)

    @app.get("/forbidden")
    def forbidden() -> dict:
        raise PermissionError("admin only")

    @app.get("/boom")
    def boom() -> dict:
        raise RuntimeError("connection string leaked")

    @app.get("/orders/{order_id}")
    def order(order_id: str) -> dict:
        raise OrderNotFoundError(order_id)

    @app.get("/batch")
    def batch() -> dict:
        raise ExceptionGroup("batch", [CoreError("first"), RuntimeError("second")])

    @app.get("/http")
    def http_error() -> dict:
        raise HTTPException(status_code=409, detail="conflict")

    return app


def configure(builder: ConfigurationBuilder) -> None:
    builder.add_behavior(LookupError, BehaviorKind.CLIENT_FAULT, 404)


@pytest.fixture
def client() -> TestClient:
    app = create_app(settings=Settings(environment="production"))
    return TestClient(mount_routes(app))


@pytest.fixture
def dev_client() -> TestClient:
    app = create_app(settings=Settings(environment="development"))
    return TestClient(mount_routes(app))


@pytest.fixture
def configured_client() -> TestClient:
    app = create_app(configure, settings=Settings(environment="production"))
    return TestClient(mount_routes(app))


class TestDefaultResponses:
    """Tests for routes raising with no configuration."""

    def test_client_fault(self, client: TestClient) -> None:
        """Business errors map to 400 with their fields."""
        response = client.get("/funds")
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {
            "message": "Insufficient funds",
            "required": 100,
            "available": 5,
        }

    def test_forbidden(self, client: TestClient) -> None:
        """PermissionError maps to the fixed 403 body."""
        response = client.get("/forbidden")
        assert response.status_code == 403
        assert response.json() == {
            "key": "Forbidden",
            "message": "Access to this resource is forbidden.",
        }

    def test_server_fault_is_redacted(self, client: TestClient) -> None:
        """Unexpected errors expose only a log entry id."""
        response = client.get("/boom")
        assert response.status_code == 500
        assert list(response.json()) == ["logEntryId"]
        assert "leaked" not in response.text

    def test_server_fault_in_development(self, dev_client: TestClient) -> None:
        """Development deployments include the exception."""
        response = dev_client.get("/boom")
        assert response.status_code == 500
        assert response.json()["exception"] == {"message": "connection string leaked"}

    def test_exception_group_last_member_wins(self, client: TestClient) -> None:
        """The response reflects the last member of an exception group."""
        response = client.get("/batch")
        assert response.status_code == 500
        assert "logEntryId" in response.json()

    def test_http_exception_untouched(self, client: TestClient) -> None:
        """FastAPI's own HTTP errors are not reclassified."""
        response = client.get("/http")
        assert response.status_code == 409
        assert response.json() == {"detail": "conflict"}

    def test_unconfigured_lookup_error_is_server_fault(self, client: TestClient) -> None:
        """Without a rule a LookupError is unexpected."""
        assert client.get("/orders/42").status_code == 500


class TestConfiguredResponses:
    """Tests for an application with a behavior rule."""

    def test_rule_applies(self, configured_client: TestClient) -> None:
        """The LookupError rule maps OrderNotFoundError to 404."""
        response = configured_client.get("/orders/42")
        assert response.status_code == 404
        assert response.json() == {"message": "Order not found: 42", "orderId": "42"}

    def test_handler_exposed_on_state(self, configured_client: TestClient) -> None:
        """The composition root keeps the installed handler."""
        handler = configured_client.app.state.exception_handler
        assert handler.configuration is not None
        assert handler.configuration.has_behaviors

