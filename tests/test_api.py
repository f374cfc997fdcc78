"""
Test suite for the FastAPI service built on the client.

Coverage:
- Health endpoint
- OAuth callback success path (user info passed through)
- Error mapping: OAuth error parameter, missing configuration, missing code,
  provider rejection, token failure, transport timeout

Test types: Integration (transport mocked)
"""

import asyncio
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from conftest import FakeTransport, make_response
from sberbank_id.api.v1.auth import get_client_factory
from sberbank_id.main import app
from sberbank_id.utils.sberbank_auth import SberbankID, SberbankIDFactory, configure


class StubFactory(SberbankIDFactory):
    """Factory whose clients talk to a FakeTransport instead of the network."""

    def __init__(self, factory: SberbankIDFactory, transport: FakeTransport):
        super().__init__(factory.config)
        self.transport = transport

    def create(self, code: Optional[str], http_client: Any = None) -> SberbankID:
        return super().create(code, http_client=self.transport.mock)


@pytest.fixture
def api_client():
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def override_factory(factory: Optional[SberbankIDFactory]) -> None:
    app.dependency_overrides[get_client_factory] = lambda: factory


@pytest.mark.api
class TestHealth:

    def test_health_check(self, api_client):
        response = api_client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "timestamp" in body


@pytest.mark.api
class TestOAuthCallback:

    def test_returns_user_info(self, api_client, factory, token_response, user_info):
        transport = FakeTransport(post_response=token_response, get_response=make_response(200, user_info))
        override_factory(StubFactory(factory, transport))

        response = api_client.get("/api/v1/auth/callback", params={"code": "auth-code", "state": "s1"})

        assert response.status_code == 200
        assert response.json() == user_info
        assert transport.calls == ["POST", "GET"]

    def test_oauth_error_parameter(self, api_client, factory):
        override_factory(factory)

        response = api_client.get("/api/v1/auth/callback", params={"error": "access_denied"})

        assert response.status_code == 400
        assert "access_denied" in response.json()["detail"]

    def test_not_configured(self, api_client):
        override_factory(None)

        response = api_client.get("/api/v1/auth/callback", params={"code": "auth-code"})

        assert response.status_code == 400

    def test_missing_code(self, api_client, factory):
        override_factory(factory)

        response = api_client.get("/api/v1/auth/callback")

        assert response.status_code == 400
        assert "code" in response.json()["detail"]

    def test_provider_unauthorized_maps_to_401(self, api_client, factory, token_response):
        transport = FakeTransport(
            post_response=token_response,
            get_response=make_response(401, {"moreInformation": "Token is not valid"})
        )
        override_factory(StubFactory(factory, transport))

        response = api_client.get("/api/v1/auth/callback", params={"code": "auth-code"})

        assert response.status_code == 401
        assert "Token is not valid" in response.json()["detail"]

    def test_provider_failure_maps_to_502(self, api_client, factory, token_response):
        transport = FakeTransport(
            post_response=token_response,
            get_response=make_response(500, {"moreInformation": "Internal"})
        )
        override_factory(StubFactory(factory, transport))

        response = api_client.get("/api/v1/auth/callback", params={"code": "auth-code"})

        assert response.status_code == 502

    def test_token_failure_maps_to_502(self, api_client, factory):
        transport = FakeTransport(post_response=make_response(400, {"error": "invalid_grant"}))
        override_factory(StubFactory(factory, transport))

        response = api_client.get("/api/v1/auth/callback", params={"code": "auth-code"})

        assert response.status_code == 502
        assert "invalid_grant" in response.json()["detail"]

    def test_transport_timeout_maps_to_504(self, api_client, factory, token_response):
        transport = FakeTransport(post_response=token_response, get_response=asyncio.TimeoutError())
        override_factory(StubFactory(factory, transport))

        response = api_client.get("/api/v1/auth/callback", params={"code": "auth-code"})

        assert response.status_code == 504


@pytest.mark.unit
class TestGetClientFactory:

    def test_returns_none_without_credentials(self, monkeypatch):
        from sberbank_id.core.settings import settings

        monkeypatch.setattr(settings, "sberbank_client_id", "")
        get_client_factory.cache_clear()

        assert get_client_factory() is None
        get_client_factory.cache_clear()

    def test_returns_none_without_redirect_url(self, monkeypatch):
        from sberbank_id.core.settings import settings

        monkeypatch.setattr(settings, "sberbank_client_id", "env-id")
        monkeypatch.setattr(settings, "sberbank_client_secret", "env-secret")
        monkeypatch.setattr(settings, "sberbank_redirect_url", "")
        get_client_factory.cache_clear()

        assert not settings.sberbank_configured
        assert get_client_factory() is None
        get_client_factory.cache_clear()

    def test_returns_none_for_invalid_config(self, monkeypatch):
        from sberbank_id.core.settings import settings

        monkeypatch.setattr(settings, "sberbank_client_id", "env-id")
        monkeypatch.setattr(settings, "sberbank_client_secret", "env-secret")
        monkeypatch.setattr(settings, "sberbank_timeout_millis", 0)
        get_client_factory.cache_clear()

        assert get_client_factory() is None
        get_client_factory.cache_clear()

    @pytest.mark.parametrize("field, value", [
        ("sberbank_redirect_url", ""),
        ("sberbank_timeout_millis", 0),
    ])
    def test_callback_is_400_when_settings_are_incomplete(self, api_client, monkeypatch, field, value):
        from sberbank_id.core.settings import settings

        monkeypatch.setattr(settings, "sberbank_client_id", "env-id")
        monkeypatch.setattr(settings, "sberbank_client_secret", "env-secret")
        monkeypatch.setattr(settings, field, value)
        get_client_factory.cache_clear()

        response = api_client.get("/api/v1/auth/callback", params={"code": "c"})

        assert response.status_code == 400
        get_client_factory.cache_clear()

    def test_builds_factory_from_settings(self, monkeypatch):
        from sberbank_id.core.settings import settings

        monkeypatch.setattr(settings, "sberbank_client_id", "env-id")
        monkeypatch.setattr(settings, "sberbank_client_secret", "env-secret")
        monkeypatch.setattr(settings, "sberbank_production", False)
        get_client_factory.cache_clear()

        factory = get_client_factory()

        assert factory.config.client_id == "env-id"
        assert factory.base_url == configure(settings.sberbank_config()).base_url
        assert factory.base_url == "https://dev.api.sberbank.ru/ru/prod"
        get_client_factory.cache_clear()
