"""Ways to construct a posts client: configuration-driven or hand-assembled."""

from __future__ import annotations

from typing import Literal

import httpx
import structlog

from remote_posts.client import BasePostClient, RemotePostClient
from remote_posts.config import DEFAULT_CLIENT_KEY, ClientEndpoint, Settings
from remote_posts.error_mapping import ErrorMapper, not_found_mapper
from remote_posts.posts_api import DeclarativePostClient, PostsApi
from remote_posts.transport import RestTransport

log = structlog.get_logger()

ClientStyle = Literal["declarative", "imperative"]


class RemotePostClientBuilder:
    """Fluent builder for a posts client with its own connection pool."""

    def __init__(self) -> None:
        self._base_url: str | None = None
        self._headers: dict[str, str] = {}
        self._timeout: float | None = None
        self._max_connections = 10
        self._error_mapper: ErrorMapper = not_found_mapper
        self._transport: httpx.AsyncBaseTransport | None = None

    def base_url(self, url: str) -> RemotePostClientBuilder:
        self._base_url = url
        return self

    def header(self, name: str, value: str) -> RemotePostClientBuilder:
        self._headers[name] = value
        return self

    def timeout(self, seconds: float | None) -> RemotePostClientBuilder:
        self._timeout = seconds
        return self

    def max_connections(self, size: int) -> RemotePostClientBuilder:
        self._max_connections = size
        return self

    def error_mapper(self, mapper: ErrorMapper) -> RemotePostClientBuilder:
        """Replace the default not_found_mapper.

        To keep 404 lookups raising NotFoundError, chain the default in:
        ``chain_mappers(custom, not_found_mapper)``.
        """
        self._error_mapper = mapper
        return self

    def transport(self, transport: httpx.AsyncBaseTransport) -> RemotePostClientBuilder:
        """Use a custom httpx transport, e.g. ASGITransport or MockTransport."""
        self._transport = transport
        return self

    def _endpoint(self) -> ClientEndpoint:
        if not self._base_url:
            raise ValueError("base_url is required to build a posts client")
        return ClientEndpoint(
            url=self._base_url,
            timeout=self._timeout,
            max_connections=self._max_connections,
            headers=dict(self._headers),
        )

    def _rest_transport(self) -> RestTransport:
        return RestTransport.from_endpoint(
            self._endpoint(), error_mapper=self._error_mapper, transport=self._transport
        )

    def build(self) -> RemotePostClient:
        """Build a client that issues requests directly through the transport."""
        return RemotePostClient(self._rest_transport())

    def build_declarative(self) -> DeclarativePostClient:
        """Build a client backed by the declared PostsApi resource."""
        return DeclarativePostClient(PostsApi(self._rest_transport()))


def create_post_client(
    settings: Settings,
    *,
    config_key: str = DEFAULT_CLIENT_KEY,
    style: ClientStyle = "declarative",
    error_mapper: ErrorMapper = not_found_mapper,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BasePostClient:
    """Create a posts client from the endpoint registered under *config_key*.

    A custom *error_mapper* replaces ``not_found_mapper``; pass
    ``chain_mappers(custom, not_found_mapper)`` to extend it instead.

    Raises:
        UnknownClientError: If no endpoint is configured for *config_key*.
        ValueError: If *style* is not a known client style.
    """
    client: BasePostClient
    if style == "declarative":
        api = PostsApi.from_settings(
            settings, config_key=config_key, error_mapper=error_mapper, transport=transport
        )
        client = DeclarativePostClient(api)
    elif style == "imperative":
        endpoint = settings.client_registry.require(config_key)
        client = RemotePostClient(
            RestTransport.from_endpoint(endpoint, error_mapper=error_mapper, transport=transport)
        )
    else:
        msg = f"Unknown client style: {style!r}"
        raise ValueError(msg)

    log.info("post_client_created", config_key=config_key, style=style)
    return client
