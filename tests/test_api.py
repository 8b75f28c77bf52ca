# =============================================================================
# tests/test_api.py - API Endpoint Tests
# =============================================================================
# Tests for:
# - Health endpoints
# - Token verification and admin gating
# - Chat completions through the resolved provider
# - Admin provider health, validation, Azure models and settings
#
# Dependencies are swapped through app.dependency_overrides; vendor SDKs
# and Supabase are mocked.
# =============================================================================

from __future__ import annotations

import time
from unittest.mock import MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.dependencies import (
    get_provider_environment,
    get_provider_health_service,
    get_settings_loader,
)
from app.main import app
from core.models.provider import Provider, ProviderEnvironment, ProviderSettings
from core.services.provider_health_service import ProviderHealthService

from tests.conftest import AZURE_KEY, GROQ_KEY

ADMIN = AuthUser(id=uuid4(), email="admin@example.com", role="admin")
MEMBER = AuthUser(id=uuid4(), email="member@example.com")

GROQ_ENV = ProviderEnvironment(groq_api_key=GROQ_KEY)


def _completion(content: str) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.usage = None
    return response


def _token(role: str | None = None, expires_in: int = 3600) -> str:
    payload = {
        "sub": str(uuid4()),
        "email": "someone@example.com",
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(time.time()) + expires_in,
    }
    if role:
        payload["app_metadata"] = {"role": role}
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def as_admin(client):
    app.dependency_overrides[get_current_user] = lambda: ADMIN
    return client


@pytest.fixture
def as_member(client):
    app.dependency_overrides[get_current_user] = lambda: MEMBER
    return client


def _use_env(env: ProviderEnvironment):
    app.dependency_overrides[get_provider_environment] = lambda: env


def _use_settings(value: ProviderSettings | None):
    app.dependency_overrides[get_settings_loader] = lambda: (lambda: value)


# =============================================================================
# Health
# =============================================================================

class TestHealthEndpoints:
    """Test health endpoints (no auth)."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "Converse API"

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["timestamp"].endswith("+00:00")

    def test_live(self, client):
        assert client.get("/api/v1/health/live").json()["status"] == "alive"

    @patch("lib.supabase_client.SupabaseClient.ping")
    def test_ready(self, mock_ping, client):
        _use_env(GROQ_ENV)

        body = client.get("/api/v1/health/ready").json()

        assert body["status"] == "ready"
        assert body["checks"]["providers"] == "healthy: groq"

    @patch("lib.supabase_client.SupabaseClient.ping")
    def test_ready_without_provider_is_degraded(self, mock_ping, client):
        _use_env(ProviderEnvironment())

        body = client.get("/api/v1/health/ready").json()

        assert body["status"] == "degraded"
        assert body["checks"]["database"] == "healthy"


# =============================================================================
# Auth
# =============================================================================

class TestAuth:
    """Test token verification against the HS256 secret."""

    def test_verify_admin_token(self, client):
        response = client.get(
            "/api/v1/auth/verify",
            headers={"Authorization": f"Bearer {_token('admin')}"},
        )

        assert response.status_code == 200
        assert response.json()["is_admin"] is True

    def test_verify_member_token(self, client):
        response = client.get(
            "/api/v1/auth/verify",
            headers={"Authorization": f"Bearer {_token()}"},
        )

        assert response.status_code == 200
        assert response.json()["is_admin"] is False

    def test_expired_token(self, client):
        response = client.get(
            "/api/v1/auth/verify",
            headers={"Authorization": f"Bearer {_token(expires_in=-60)}"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_missing_token(self, client):
        response = client.get("/api/v1/admin/providers/validation")

        assert response.status_code in (401, 403)

    def test_member_cannot_use_admin_endpoints(self, as_member):
        response = as_member.get("/api/v1/admin/providers/validation")

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"


# =============================================================================
# Chat
# =============================================================================

class TestChat:
    """Test POST /api/v1/chat."""

    def test_completion_uses_static_default_without_settings(self, as_member):
        _use_env(GROQ_ENV)
        _use_settings(None)

        with patch("core.providers.language_models.Groq") as groq_cls:
            groq_cls.return_value.chat.completions.create.return_value = _completion("Hi!")

            response = as_member.post("/api/v1/chat", json={
                "model": "chat-model",
                "messages": [{"role": "user", "content": "Hello"}],
            })

        assert response.status_code == 200
        body = response.json()
        assert body["provider"] == "groq"
        assert body["model_id"] == "openai/gpt-oss-20b"
        assert body["content"] == "Hi!"
        assert body["usage"] == {}
        groq_cls.assert_called_once_with(api_key=GROQ_KEY)

    def test_reasoning_role_splits_think_block(self, as_member):
        _use_env(GROQ_ENV)
        _use_settings(ProviderSettings())

        with patch("core.providers.language_models.Groq") as groq_cls:
            groq_cls.return_value.chat.completions.create.return_value = _completion(
                "<think>short plan</think>Do the thing."
            )

            response = as_member.post("/api/v1/chat", json={
                "model": "chat-model-reasoning",
                "messages": [{"role": "user", "content": "What now?"}],
            })

        body = response.json()
        assert body["content"] == "Do the thing."
        assert body["reasoning"] == "short plan"

    def test_no_provider_configured(self, as_member):
        _use_env(ProviderEnvironment())
        _use_settings(ProviderSettings())

        response = as_member.post("/api/v1/chat", json={
            "messages": [{"role": "user", "content": "Hello"}],
        })

        assert response.status_code == 503
        body = response.json()
        assert body["code"] == "NO_PROVIDER_CONFIGURED"
        assert "Groq: " in body["detail"]

    def test_vendor_failure(self, as_member):
        _use_env(GROQ_ENV)
        _use_settings(None)

        with patch("core.providers.language_models.Groq") as groq_cls:
            groq_cls.return_value.chat.completions.create.side_effect = RuntimeError("503 upstream")

            response = as_member.post("/api/v1/chat", json={
                "messages": [{"role": "user", "content": "Hello"}],
            })

        assert response.status_code == 502
        assert response.json()["code"] == "MODEL_INVOCATION_FAILED"

    def test_unknown_role_rejected(self, as_member):
        response = as_member.post("/api/v1/chat", json={
            "model": "embedding-model",
            "messages": [{"role": "user", "content": "Hello"}],
        })

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    @patch("core.services.settings_service.SupabaseClient")
    def test_malformed_stored_preference_falls_back_to_groq(self, mock_client, as_member):
        mock_client.fetch_settings.return_value = {"defaultProviderPreference": ["azure"]}
        _use_env(GROQ_ENV)

        with patch("core.providers.language_models.Groq") as groq_cls:
            groq_cls.return_value.chat.completions.create.return_value = _completion("Hi!")

            response = as_member.post("/api/v1/chat", json={
                "messages": [{"role": "user", "content": "Hello"}],
            })

        assert response.status_code == 200
        assert response.json()["provider"] == "groq"


# =============================================================================
# Admin
# =============================================================================

class TestAdminProviders:
    """Test provider health, validation and Azure model listing."""

    def test_validation(self, as_admin):
        _use_env(GROQ_ENV)

        body = as_admin.get("/api/v1/admin/providers/validation").json()

        assert body["has_valid_provider"] is True
        assert body["configured_providers"] == ["groq"]

    def test_health(self, as_admin):
        def handler(request):
            return httpx.Response(200, json={"data": [{"id": "m"}]})

        _use_env(GROQ_ENV)
        app.dependency_overrides[get_provider_health_service] = (
            lambda: ProviderHealthService(transport=httpx.MockTransport(handler))
        )

        body = as_admin.get("/api/v1/admin/providers/health").json()

        assert body["status"] == "operational"
        assert body["summary"]["healthy"] == 1

    def test_health_with_non_json_body(self, as_admin):
        def handler(request):
            return httpx.Response(200, text="<html>gateway</html>")

        _use_env(GROQ_ENV)
        app.dependency_overrides[get_provider_health_service] = (
            lambda: ProviderHealthService(transport=httpx.MockTransport(handler))
        )

        response = as_admin.get("/api/v1/admin/providers/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["providers"][0]["status"] == "unhealthy"

    def test_azure_models(self, as_admin):
        def handler(request):
            return httpx.Response(200, json={"data": [{"id": "prod-chat", "model": "gpt-4o"}]})

        _use_env(ProviderEnvironment(azure_resource_name="res", azure_api_key=AZURE_KEY))
        app.dependency_overrides[get_provider_health_service] = (
            lambda: ProviderHealthService(transport=httpx.MockTransport(handler))
        )

        body = as_admin.get("/api/v1/admin/models/azure").json()

        assert body["models"] == [{"id": "prod-chat", "name": "gpt-4o"}]


class TestAdminSettings:
    """Test reading and updating provider settings."""

    @patch("core.services.settings_service.SupabaseClient")
    def test_get_settings(self, mock_client, as_admin):
        mock_client.fetch_settings.return_value = {"defaultProviderPreference": "vertex"}

        response = as_admin.get("/api/v1/admin/settings/providers")

        assert response.status_code == 200
        assert response.json()["defaultProviderPreference"] == "vertex"

    @patch("core.services.settings_service.SupabaseClient")
    def test_update_settings(self, mock_client, as_admin):
        mock_client.fetch_settings.return_value = {
            "defaultProviderPreference": "azure",
            "modelOverridesAzure": {"chat-model": "prod-chat"},
        }

        response = as_admin.put("/api/v1/admin/settings/providers", json={
            "defaultProviderPreference": "azure",
            "modelOverridesAzure": {"chat-model": " prod-chat "},
        })

        assert response.status_code == 200
        mock_client.upsert_settings.assert_called_once_with({
            "defaultProviderPreference": "azure",
            "modelOverridesAzure": {"chat-model": "prod-chat"},
        })
        assert response.json()["modelOverridesAzure"] == {"chat-model": "prod-chat"}

    @patch("core.services.settings_service.SupabaseClient")
    def test_update_rejects_unknown_role(self, mock_client, as_admin):
        response = as_admin.put("/api/v1/admin/settings/providers", json={
            "modelOverridesGroq": {"embedding-model": "x"},
        })

        assert response.status_code == 422
        mock_client.upsert_settings.assert_not_called()

    def test_member_cannot_update(self, as_member):
        response = as_member.put("/api/v1/admin/settings/providers", json={
            "defaultProviderPreference": "groq",
        })

        assert response.status_code == 403

    def test_settings_change_applies_to_next_request(self, as_admin):
        full = GROQ_ENV.model_copy(update={
            "azure_resource_name": "res",
            "azure_api_key": AZURE_KEY,
        })
        _use_env(full)
        _use_settings(ProviderSettings(default_provider_preference=Provider.AZURE))

        with patch("core.providers.language_models.AzureOpenAI") as azure_cls:
            azure_cls.return_value.chat.completions.create.return_value = _completion("ok")

            body = as_admin.post("/api/v1/chat", json={
                "messages": [{"role": "user", "content": "Hello"}],
            }).json()

        assert body["provider"] == "azure"
        assert body["model_id"] == "gpt-4.1"
