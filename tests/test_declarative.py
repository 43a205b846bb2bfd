"""Tests for declarative REST resources."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from remote_posts.config import ClientEndpoint
from remote_posts.declarative import RestResource, Route, get, route_of
from remote_posts.errors import NotFoundError
from remote_posts.models import Post
from remote_posts.posts_api import PostsApi
from remote_posts.transport import RestTransport
from tests.conftest import POST_API_URL, POST_PAYLOAD, make_settings


class CommentsApi(RestResource):
    config_key = "comments-api"

    @get("/posts/{post_id}/comments/{comment_id}", resource_arg="comment_id")
    async def get_comment(self, post_id: str, comment_id: int, expand: str | None = None) -> Post:
        raise NotImplementedError


def _resource(
    cls: type[RestResource], handler: Callable[[httpx.Request], httpx.Response]
) -> RestResource:
    endpoint = ClientEndpoint(url=POST_API_URL)
    return cls(RestTransport.from_endpoint(endpoint, transport=httpx.MockTransport(handler)))


class TestRoutes:
    def test_posts_api_declares_all_endpoints(self) -> None:
        assert PostsApi.routes() == {
            "count_posts": Route(path="/posts/count"),
            "list_posts": Route(path="/posts"),
            "get_post": Route(path="/posts/{post_id}", resource_arg="post_id"),
        }

    def test_route_of_plain_function_is_none(self) -> None:
        async def plain() -> None: ...

        assert route_of(plain) is None

    def test_path_params(self) -> None:
        route = route_of(CommentsApi.get_comment)
        assert route is not None
        assert route.path_params == ["post_id", "comment_id"]

    def test_missing_path_param_rejected(self) -> None:
        with pytest.raises(TypeError, match="path parameters"):

            @get("/posts/{post_id}")
            async def broken(self: RestResource) -> Post: ...

    def test_unknown_resource_arg_rejected(self) -> None:
        with pytest.raises(TypeError, match="unknown resource_arg"):

            @get("/posts", resource_arg="nope")
            async def broken(self: RestResource) -> list[Post]: ...


class TestBinding:
    async def test_path_and_query_arguments(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=POST_PAYLOAD)

        api = _resource(CommentsApi, handler)
        post = await api.get_comment("p 1", 9, expand="author")  # type: ignore[attr-defined]
        await api.transport.aclose()

        assert post.id == "1"
        assert seen[0].url.raw_path == b"/posts/p%201/comments/9?expand=author"

    async def test_none_arguments_are_omitted(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=POST_PAYLOAD)

        api = _resource(CommentsApi, handler)
        await api.get_comment(post_id="p", comment_id=1)  # type: ignore[attr-defined]
        await api.transport.aclose()

        assert seen[0].url.query == b""

    async def test_resource_arg_feeds_error_mapper(self) -> None:
        api = _resource(CommentsApi, lambda r: httpx.Response(404))
        with pytest.raises(NotFoundError) as exc_info:
            await api.get_comment("p", 42)  # type: ignore[attr-defined]
        await api.transport.aclose()
        assert exc_info.value.resource_id == "42"

    async def test_return_annotation_drives_decoding(self) -> None:
        api = _resource(PostsApi, lambda r: httpx.Response(200, text="12"))
        assert await api.count_posts() == 12  # type: ignore[attr-defined]
        await api.transport.aclose()

    async def test_bad_arguments_raise_type_error(self) -> None:
        api = _resource(PostsApi, lambda r: httpx.Response(200, text="1"))
        with pytest.raises(TypeError):
            await api.count_posts("a", "b")  # type: ignore[attr-defined]
        await api.transport.aclose()


class TestFromSettings:
    def test_uses_class_config_key(self) -> None:
        api = PostsApi.from_settings(make_settings())
        assert api.transport.base_url.host == httpx.URL(POST_API_URL).host

    def test_explicit_config_key(self) -> None:
        settings = make_settings(
            rest_clients='{"mappings": {"comments-api": {"url": "http://comments.test"}}}'
        )
        api = CommentsApi.from_settings(settings)
        assert api.transport.base_url.host == "comments.test"

    def test_unknown_config_key(self) -> None:
        with pytest.raises(KeyError, match="comments-api"):
            CommentsApi.from_settings(make_settings())
