"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from remote_posts.config import ClientEndpoint, ClientRegistry, Settings, UnknownClientError
from tests.conftest import POST_API_URL, REST_CLIENTS_JSON, make_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("POST_API_URL", "POST_API_TIMEOUT", "REST_CLIENTS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_settings_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POST_API_URL", POST_API_URL)
    monkeypatch.setenv("POST_API_TIMEOUT", "2.5")

    settings = Settings()

    endpoint = settings.client_registry.require("post-api")
    assert endpoint.url == POST_API_URL
    assert endpoint.timeout == 2.5


def test_settings_defaults() -> None:
    settings = make_settings()
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.log_level == "info"
    assert settings.post_api_timeout is None


def test_settings_requires_a_client() -> None:
    with pytest.raises(ValidationError, match="Either POST_API_URL or REST_CLIENTS"):
        Settings()


def test_rest_clients_json_parsed() -> None:
    settings = make_settings(post_api_url=None, rest_clients=REST_CLIENTS_JSON)
    endpoint = settings.client_registry.require("post-api")
    assert endpoint.timeout == 5.0
    assert endpoint.max_connections == 4
    assert endpoint.headers == {"X-Api-Key": "test-key"}


def test_rest_clients_take_precedence_over_shortcut() -> None:
    settings = make_settings(post_api_url="http://other.test", rest_clients=REST_CLIENTS_JSON)
    assert settings.client_registry.require("post-api").url == POST_API_URL


def test_shortcut_fills_missing_default_key() -> None:
    settings = make_settings(
        rest_clients='{"mappings": {"comments-api": {"url": "http://comments.test"}}}'
    )
    registry = settings.client_registry
    assert "comments-api" in registry
    assert registry.require("post-api").url == POST_API_URL


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"mappings": {"post-api": {"timeout": 1.0}}}',
        '{"mappings": {"post-api": {"url": "http://x", "max_connections": 0}}}',
    ],
)
def test_invalid_rest_clients_rejected(raw: str) -> None:
    with pytest.raises(ValidationError, match="REST_CLIENTS is not a valid client registry"):
        make_settings(rest_clients=raw)


def test_blank_rest_clients_treated_as_unset() -> None:
    assert make_settings(rest_clients="  ").rest_clients is None


class TestClientRegistry:
    def test_lookup(self) -> None:
        registry = ClientRegistry(mappings={"post-api": ClientEndpoint(url=POST_API_URL)})
        assert registry.get("post-api") is not None
        assert registry.get("other") is None
        assert "post-api" in registry

    def test_require_unknown_lists_configured_keys(self) -> None:
        registry = ClientRegistry(mappings={"post-api": ClientEndpoint(url=POST_API_URL)})
        with pytest.raises(UnknownClientError, match="post-api"):
            registry.require("other")

    def test_endpoint_defaults(self) -> None:
        endpoint = ClientEndpoint(url=POST_API_URL)
        assert endpoint.timeout is None
        assert endpoint.max_connections == 10
        assert endpoint.headers == {}
