"""
Shared fixtures.

Builds small FastAPI apps with the shared error handlers registered,
so each test module can add the routes it needs.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from server.shared.errors.handlers import register_error_handlers


@pytest.fixture
def error_app() -> FastAPI:
    """A bare FastAPI app with the catch-all error handlers registered."""
    app = FastAPI()
    register_error_handlers(app)
    return app


@pytest.fixture
def make_client():
    """Return a factory for TestClients that render 500s instead of raising."""

    def _make(app: FastAPI) -> TestClient:
        return TestClient(app, raise_server_exceptions=False)

    return _make
