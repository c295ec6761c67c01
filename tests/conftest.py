"""Shared fixtures.

Every test builds its own app through create_app() with an explicit
Settings, a fresh ResultStore and the in-memory MockIdentityProvider, so no
test depends on environment variables or reaches the network.
"""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from idv_gateway.config import Settings
from idv_gateway.main import create_app
from idv_gateway.services.identity_providers.mock import MockIdentityProvider
from idv_gateway.services.result_store import ResultStore
from idv_gateway.services.signature import compute_signature

WEBHOOK_SECRET = "onfido-test-secret"


def sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
    return compute_signature(body, secret)


def to_body(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def store():
    return ResultStore()


@pytest.fixture
def provider():
    return MockIdentityProvider()


@pytest.fixture
def make_client(store, provider, tmp_path):
    """Factory: TestClient over a fresh app; kwargs override Settings fields."""

    def _make(**overrides) -> TestClient:
        overrides.setdefault("client_dist_dir", str(tmp_path / "no-dist"))
        settings = Settings(**overrides)
        app = create_app(settings=settings, store=store, provider=provider)
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    """No webhook secret configured (signature checks skipped)."""
    return make_client()


@pytest.fixture
def signed_client(make_client):
    """Webhook secret configured (signature required)."""
    return make_client(onfido_webhook_secret=WEBHOOK_SECRET)
