"""
Unit tests for backend/main.py
"""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from unittest.mock import patch

from backend.main import _configure_cors, _create_supabase_client, _init_sentry, create_app
from backend.settings import Settings


@pytest.mark.unit
class TestCreateApp:
    """Test the create_app() factory function."""

    def test_create_app_returns_fastapi_instance(self):
        settings = Settings(environment="test", _env_file=None)
        assert isinstance(create_app(settings=settings), FastAPI)

    def test_create_app_uses_default_settings_when_none_provided(self):
        with patch("backend.main.get_settings") as mock_get_settings:
            mock_get_settings.return_value = Settings(environment="test", _env_file=None)
            app = create_app(settings=None)
            mock_get_settings.assert_called_once()
            assert isinstance(app, FastAPI)

    def test_create_app_configures_app_metadata(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        assert app.title == "IronMatch Arena API"
        assert app.version == "1.0.0"

    def test_settings_stored_on_state(self):
        settings = Settings(environment="test", _env_file=None)
        app = create_app(settings=settings)
        assert app.state.settings is settings
        assert app.state.supabase is None

    def test_routes_registered(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        paths = app.openapi()["paths"]
        for path in (
            "/health",
            "/ranks/me",
            "/profile/me/lifts",
            "/strength/fairness",
            "/quests/weekly",
            "/duels",
            "/duels/{duel_id}/accept",
            "/cosmetics",
            "/leaderboard/gyms",
        ):
            assert path in paths

    def test_log_level_applied(self):
        root = logging.getLogger()
        previous = root.level
        try:
            create_app(settings=Settings(environment="test", log_level="WARNING", _env_file=None))
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)


@pytest.mark.unit
class TestInitSentry:
    """Test Sentry initialization."""

    def test_init_sentry_skipped_when_no_dsn(self):
        settings = Settings(sentry_dsn=None, _env_file=None)
        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_not_called()

    def test_init_sentry_called_when_dsn_provided(self):
        settings = Settings(
            sentry_dsn="https://test@sentry.io/123",
            environment="test",
            sentry_traces_sample_rate=0.5,
            _env_file=None,
        )
        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_called_once_with(
                dsn="https://test@sentry.io/123",
                environment="test",
                traces_sample_rate=0.5,
            )


@pytest.mark.unit
class TestSupabaseClient:
    """Test Supabase client creation in the lifespan."""

    def test_none_without_credentials(self):
        with patch("backend.main.create_client") as mock_create:
            assert _create_supabase_client(Settings(_env_file=None, supabase_url=None)) is None
            mock_create.assert_not_called()

    def test_created_with_best_key(self):
        settings = Settings(
            supabase_url="https://proj.supabase.co",
            supabase_service_role_key="service",
            supabase_anon_key="anon",
            _env_file=None,
        )
        with patch("backend.main.create_client") as mock_create:
            client = _create_supabase_client(settings)
            mock_create.assert_called_once_with("https://proj.supabase.co", "service")
            assert client is mock_create.return_value

    def test_lifespan_sets_and_releases_client(self):
        settings = Settings(
            environment="test",
            supabase_url="https://proj.supabase.co",
            supabase_anon_key="anon",
            _env_file=None,
        )
        with patch("backend.main.create_client") as mock_create:
            app = create_app(settings=settings)
            with TestClient(app):
                assert app.state.supabase is mock_create.return_value
            assert app.state.supabase is None


@pytest.mark.unit
class TestConfigureCors:
    """Test CORS configuration."""

    def test_configure_cors_adds_middleware(self):
        app = FastAPI()
        initial = len(app.user_middleware)
        _configure_cors(app, Settings(_env_file=None))
        assert len(app.user_middleware) == initial + 1

    def test_wildcard_disables_credentials(self):
        app = FastAPI()
        _configure_cors(app, Settings(cors_origins="*", _env_file=None))
        assert app.user_middleware[0].kwargs["allow_credentials"] is False

    def test_explicit_origins_allow_credentials(self):
        app = FastAPI()
        _configure_cors(app, Settings(cors_origins="http://localhost:3000", _env_file=None))
        middleware = app.user_middleware[0]
        assert middleware.kwargs["allow_credentials"] is True
        assert middleware.kwargs["allow_origins"] == ["http://localhost:3000"]


@pytest.mark.integration
class TestAppIntegration:
    """Integration tests for the created app."""

    def test_health(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        response = TestClient(app).get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "environment": "test"}

    def test_cors_allows_requests(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        response = TestClient(app).get("/health", headers={"Origin": "http://localhost:3000"})
        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers

    def test_database_routes_unavailable_without_supabase(self):
        app = create_app(settings=Settings(environment="test", api_keys="sk_test", _env_file=None))
        response = TestClient(app).get("/ranks/me", headers={"X-API-Key": "sk_test:alice"})
        assert response.status_code == 503
