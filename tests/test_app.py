"""Tests for app assembly: health, frontend serving, startup checks, configuration, provider factory."""

from __future__ import annotations

import importlib
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

import idv_gateway.main as main_module
from idv_gateway.config import Settings
from idv_gateway.main import create_app
from idv_gateway.services.identity_providers.factory import get_identity_provider
from idv_gateway.services.identity_providers.mock import MockIdentityProvider
from idv_gateway.services.identity_providers.onfido import OnfidoProvider
from idv_gateway.services.result_store import ResultStore


class TestHealth:

    def test_healthz(self, client):
        resp = client.get("/healthz")
        assert resp.status_code == 200
        assert resp.text == "ok"


class TestCreateApp:

    def test_injected_store_is_used(self, client, store):
        assert client.app.state.result_store is store

    def test_default_store_per_app(self, tmp_path):
        settings = Settings(client_dist_dir=str(tmp_path / "x"), sandbox=True)
        a = create_app(settings=settings)
        b = create_app(settings=settings)
        assert isinstance(a.state.result_store, ResultStore)
        assert a.state.result_store is not b.state.result_store


class TestFrontend:

    def _client(self, tmp_path) -> TestClient:
        dist = tmp_path / "dist"
        (dist / "assets").mkdir(parents=True)
        (dist / "index.html").write_text("<html>app</html>")
        (dist / "assets" / "app.js").write_text("console.log('hi')")
        settings = Settings(client_dist_dir=str(dist), sandbox=True)
        return TestClient(create_app(settings=settings))

    def test_static_file(self, tmp_path):
        resp = self._client(tmp_path).get("/assets/app.js")
        assert resp.status_code == 200
        assert "console.log" in resp.text

    def test_spa_fallback(self, tmp_path):
        resp = self._client(tmp_path).get("/verify/step-2")
        assert resp.status_code == 200
        assert resp.text == "<html>app</html>"

    def test_api_routes_not_shadowed(self, tmp_path):
        client = self._client(tmp_path)
        assert client.get("/healthz").text == "ok"
        assert client.get("/api/webhook_runs/nope").json() == {"message": "not found"}

    def test_no_dist_no_fallback(self, client):
        assert client.get("/verify/step-2").status_code == 404


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("ONFIDO_API_TOKEN", "ONFIDO_API_BASE", "ONFIDO_WEBHOOK_SECRET",
                     "DEBUG", "TESTING", "CORS_ORIGINS", "PORT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.onfido_api_base == "https://api.us.onfido.com"
        assert settings.onfido_api_version == "v3.6"
        assert settings.signature_required is False
        assert settings.sandbox is False
        assert settings.cors_origins == ["*"]
        assert settings.port == 3000

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ONFIDO_API_TOKEN", "tok")
        monkeypatch.setenv("ONFIDO_API_BASE", "https://api.eu.onfido.com/")
        monkeypatch.setenv("ONFIDO_WEBHOOK_SECRET", "s3cret")
        monkeypatch.setenv("TESTING", "1")
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://app.example.com")
        monkeypatch.setenv("PORT", "8080")
        settings = Settings.from_env()
        assert settings.onfido_api_token == "tok"
        assert settings.onfido_api_base == "https://api.eu.onfido.com"
        assert settings.signature_required is True
        assert settings.sandbox is True
        assert settings.cors_origins == ["http://localhost:5173", "https://app.example.com"]
        assert settings.port == 8080


class TestProviderFactory:

    def test_onfido(self):
        assert isinstance(get_identity_provider("onfido", Settings()), OnfidoProvider)

    def test_mock_by_name(self):
        assert isinstance(get_identity_provider("mock", Settings()), MockIdentityProvider)

    def test_sandbox_forces_mock(self):
        assert isinstance(get_identity_provider("onfido", Settings(sandbox=True)), MockIdentityProvider)

    def test_unknown_falls_back_to_onfido(self):
        assert isinstance(get_identity_provider("acme", Settings()), OnfidoProvider)


class TestStartupCredentials:

    def _settings(self, tmp_path, **overrides) -> Settings:
        return Settings(client_dist_dir=str(tmp_path / "x"), **overrides)

    def test_missing_token_blocks_startup(self, tmp_path):
        app = create_app(settings=self._settings(tmp_path))
        with pytest.raises(RuntimeError, match="ONFIDO_API_TOKEN"):
            with TestClient(app):
                pass

    def test_token_allows_startup(self, tmp_path):
        app = create_app(settings=self._settings(tmp_path, onfido_api_token="tok"))
        with TestClient(app) as client:
            assert client.get("/healthz").text == "ok"

    def test_sandbox_starts_without_token(self, tmp_path):
        app = create_app(settings=self._settings(tmp_path, sandbox=True))
        with TestClient(app) as client:
            assert client.get("/healthz").status_code == 200


class TestRun:

    @pytest.fixture(autouse=True)
    def _env(self, monkeypatch, tmp_path):
        for name in ("ONFIDO_API_TOKEN", "DEBUG", "TESTING", "IDENTITY_PROVIDER", "PORT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("CLIENT_DIST_DIR", str(tmp_path / "x"))

    @patch("idv_gateway.main.uvicorn.run")
    def test_exits_without_token(self, mock_uvicorn):
        with pytest.raises(SystemExit) as exc:
            main_module.run()
        assert exc.value.code == 1
        mock_uvicorn.assert_not_called()

    @patch("idv_gateway.main.uvicorn.run")
    def test_serves_with_token(self, mock_uvicorn, monkeypatch):
        monkeypatch.setenv("ONFIDO_API_TOKEN", "tok")
        monkeypatch.setenv("PORT", "8081")
        main_module.run()
        mock_uvicorn.assert_called_once()
        assert mock_uvicorn.call_args.kwargs["port"] == 8081

    def test_import_does_not_read_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "abc")
        reloaded = importlib.reload(main_module)
        assert not hasattr(reloaded, "app")
