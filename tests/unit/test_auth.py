"""
Unit tests for backend/auth.py

Tests cover:
- Supabase access token validation (HS256, audience, expiry)
- API key validation with and without an embedded user id
- Test bypass headers and their production lockout
- Credential precedence in get_current_user
"""
import time

import jwt
import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient

from backend.auth import get_current_user, validate_api_key, validate_jwt, validate_test_auth
from backend.settings import Settings

pytestmark = pytest.mark.unit

SECRET = "super-secret-jwt-token-with-at-least-32-characters"


def _settings(**overrides) -> Settings:
    fields = dict(
        environment="test",
        supabase_jwt_secret=SECRET,
        api_keys="sk_test_abc",
        test_auth_secret="e2e-secret",
        _env_file=None,
    )
    fields.update(overrides)
    return Settings(**fields)


def _token(sub="user-123", aud="authenticated", exp_offset=3600, secret=SECRET) -> str:
    payload = {"aud": aud, "exp": int(time.time()) + exp_offset}
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, secret, algorithm="HS256")


class TestValidateJwt:

    def test_valid_token(self):
        assert validate_jwt(f"Bearer {_token()}", _settings()) == "user-123"

    def test_missing_bearer_prefix(self):
        with pytest.raises(HTTPException) as exc:
            validate_jwt(_token(), _settings())
        assert exc.value.status_code == 401

    def test_expired(self):
        with pytest.raises(HTTPException) as exc:
            validate_jwt(f"Bearer {_token(exp_offset=-60)}", _settings())
        assert exc.value.detail == "Token expired"

    def test_wrong_audience(self):
        with pytest.raises(HTTPException) as exc:
            validate_jwt(f"Bearer {_token(aud='anon')}", _settings())
        assert exc.value.status_code == 401

    def test_wrong_secret(self):
        token = _token(secret="another-secret-that-is-also-long-enough-for-hs256")
        with pytest.raises(HTTPException) as exc:
            validate_jwt(f"Bearer {token}", _settings())
        assert exc.value.status_code == 401

    def test_missing_sub(self):
        with pytest.raises(HTTPException) as exc:
            validate_jwt(f"Bearer {_token(sub=None)}", _settings())
        assert exc.value.detail == "Token missing user ID"

    def test_secret_not_configured(self):
        with pytest.raises(HTTPException) as exc:
            validate_jwt(f"Bearer {_token()}", _settings(supabase_jwt_secret=None))
        assert exc.value.status_code == 500


class TestValidateApiKey:

    def test_plain_key_is_admin(self):
        assert validate_api_key("sk_test_abc", _settings()) == "admin"

    def test_key_with_user(self):
        assert validate_api_key("sk_test_abc:user_42", _settings()) == "user_42"

    def test_unknown_key(self):
        with pytest.raises(HTTPException) as exc:
            validate_api_key("sk_nope", _settings())
        assert exc.value.status_code == 401

    def test_not_configured(self):
        with pytest.raises(HTTPException) as exc:
            validate_api_key("sk_test_abc", _settings(api_keys=""))
        assert exc.value.detail == "API key authentication not configured"


class TestValidateTestAuth:

    def test_matching_secret(self):
        assert validate_test_auth("e2e-secret", "tester", _settings()) == "tester"

    def test_wrong_secret(self):
        with pytest.raises(HTTPException):
            validate_test_auth("guess", "tester", _settings())

    def test_disabled_in_production(self):
        with pytest.raises(HTTPException) as exc:
            validate_test_auth("e2e-secret", "tester", _settings(environment="production"))
        assert exc.value.detail == "Test authentication not enabled"


class TestGetCurrentUser:

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.state.settings = _settings()

        @app.get("/whoami")
        async def whoami(user_id: str = Depends(get_current_user)):
            return {"user_id": user_id}

        return TestClient(app)

    def test_no_credentials(self, client):
        assert client.get("/whoami").status_code == 401

    def test_bearer_token(self, client):
        response = client.get("/whoami", headers={"Authorization": f"Bearer {_token()}"})
        assert response.json() == {"user_id": "user-123"}

    def test_api_key_wins_over_token(self, client):
        response = client.get(
            "/whoami",
            headers={"Authorization": f"Bearer {_token()}", "X-API-Key": "sk_test_abc:bob"},
        )
        assert response.json() == {"user_id": "bob"}

    def test_test_bypass(self, client):
        response = client.get("/whoami", headers={"X-Test-Auth": "e2e-secret", "X-Test-User-Id": "carol"})
        assert response.json() == {"user_id": "carol"}
