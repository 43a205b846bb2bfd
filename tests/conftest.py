"""Shared test constants, fixtures, and factory functions."""

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from remote_posts.client import BasePostClient
from remote_posts.config import Settings
from remote_posts.factory import RemotePostClientBuilder
from remote_posts.main import app
from tests.fake_posts_api import app as fake_posts_app

# -- Constants --

POST_API_URL = "http://posts.test"
REST_CLIENTS_JSON = (
    '{"mappings": {"post-api": {"url": "http://posts.test", "timeout": 5.0, '
    '"max_connections": 4, "headers": {"X-Api-Key": "test-key"}}}}'
)

CLIENT_STYLES = ["imperative", "declarative"]

POST_PAYLOAD: dict[str, Any] = {
    "id": "1",
    "title": "Hello world",
    "body": "First post",
    "author": "ada",
}


# -- Factories --


def make_settings(**overrides: Any) -> Settings:
    """Create a Settings instance with test defaults. Override any field."""
    defaults: dict[str, Any] = {"post_api_url": POST_API_URL}
    return Settings(**(defaults | overrides))  # type: ignore[arg-type]


def make_builder(transport: httpx.AsyncBaseTransport | None = None) -> RemotePostClientBuilder:
    """Builder pointed at the fake posts API (or a custom transport)."""
    return (
        RemotePostClientBuilder()
        .base_url(POST_API_URL)
        .transport(transport or ASGITransport(app=fake_posts_app))
    )


def make_post_client(
    style: str = "imperative", transport: httpx.AsyncBaseTransport | None = None
) -> BasePostClient:
    """Create a posts client of the given style."""
    builder = make_builder(transport)
    return builder.build_declarative() if style == "declarative" else builder.build()


# -- Fixtures --


@pytest.fixture(params=CLIENT_STYLES)
async def post_client(request: pytest.FixtureRequest) -> AsyncIterator[BasePostClient]:
    """Posts client of each style wired to the fake posts API."""
    client = make_post_client(request.param)
    yield client
    await client.aclose()


@pytest.fixture
def env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set required env vars for Settings."""
    monkeypatch.setenv("POST_API_URL", POST_API_URL)


@pytest.fixture
async def gateway(env_vars: None) -> AsyncIterator[AsyncClient]:
    """AsyncClient wired to the gateway app, backed by the fake posts API."""
    app.state.settings = make_settings()
    app.state.post_client = make_post_client()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    await app.state.post_client.aclose()
