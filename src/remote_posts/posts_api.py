"""Declarative description of the remote posts endpoints."""

from __future__ import annotations


from remote_posts.client import (
    COUNT_PATH,
    POSTS_PATH,
    BasePostClient,
    clip_to_limit,
    require_post_id,
)
from remote_posts.config import DEFAULT_CLIENT_KEY
from remote_posts.declarative import RestResource, get
from remote_posts.models import DEFAULT_LIMIT, DEFAULT_OFFSET, Post, PostCount, PostQuery


class PostsApi(RestResource):
    """Endpoints of the posts resource, bound by config key 'post-api'."""

    config_key = DEFAULT_CLIENT_KEY

    @get(COUNT_PATH)
    async def count_posts(self, q: str | None = None) -> PostCount:
        """GET /posts/count"""
        raise NotImplementedError

    @get(POSTS_PATH)
    async def list_posts(
        self, q: str | None = None, offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT
    ) -> list[Post]:
        """GET /posts"""
        raise NotImplementedError

    @get(POSTS_PATH + "/{post_id}", resource_arg="post_id")
    async def get_post(self, post_id: str) -> Post:
        """GET /posts/{post_id}"""
        raise NotImplementedError


class DeclarativePostClient(BasePostClient):
    """Posts client backed by the declared PostsApi resource."""

    def __init__(self, api: PostsApi) -> None:
        super().__init__(api.transport)
        self._api = api

    async def count_all(self, q: str | None = None) -> int:
        return await self._api.count_posts(q)

    async def list_all(
        self, q: str | None = None, offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT
    ) -> list[Post]:
        query = PostQuery(q=q, offset=offset, limit=limit)
        posts = await self._api.list_posts(query.q, query.offset, query.limit)
        return await clip_to_limit(posts, query.limit)

    async def get_by_id(self, post_id: str) -> Post:
        return await self._api.get_post(require_post_id(post_id))
