from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from chatelix.config import Settings
from chatelix.core.ratelimit import limiter
from chatelix.streaming.relay import StreamingRelay
from fakes import API_KEY, BASE_URL, EdgeFunctions


@pytest.fixture
def settings() -> Settings:
    return Settings(functions_base_url=BASE_URL, functions_api_key=API_KEY)


@pytest.fixture
def make_relay(settings: Settings):
    def _make(edge: EdgeFunctions) -> StreamingRelay:
        return StreamingRelay(settings, transport=edge.transport)
    return _make


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def api_client(make_relay):
    """TestClient whose relay talks to the given fake edge functions."""
    from chatelix.api.v1.chat import get_relay
    from chatelix.main import app

    def _client(edge: EdgeFunctions) -> TestClient:
        app.dependency_overrides[get_relay] = lambda: make_relay(edge)
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
