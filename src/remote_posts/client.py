"""Posts client contract and its raw-transport implementation."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Protocol
from urllib.parse import quote

import structlog

from remote_posts.models import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    Post,
    PostCount,
    PostPage,
    PostQuery,
)
from remote_posts.transport import RestTransport, decode

log = structlog.get_logger()

POSTS_PATH = "/posts"
COUNT_PATH = "/posts/count"


class PostClientProtocol(Protocol):
    """Interface shared by every posts client style."""

    async def count_all(self, q: str | None = None) -> int: ...
    async def list_all(
        self, q: str | None = None, offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT
    ) -> list[Post]: ...
    async def get_by_id(self, post_id: str) -> Post: ...
    async def get_all_posts(
        self, q: str | None = None, offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT
    ) -> PostPage: ...
    async def aclose(self) -> None: ...


def require_post_id(post_id: str) -> str:
    if not post_id or not post_id.strip():
        raise ValueError("post_id must not be empty")
    return post_id


async def clip_to_limit(posts: list[Post], limit: int) -> list[Post]:
    """Enforce len(posts) <= limit even if the server ignores the limit."""
    if len(posts) > limit:
        await log.awarning("posts_over_limit", received=len(posts), limit=limit)
        return posts[:limit]
    return posts


class BasePostClient(ABC):
    """Shared composition logic on top of the three primitive operations."""

    def __init__(self, transport: RestTransport) -> None:
        self._transport = transport

    @abstractmethod
    async def count_all(self, q: str | None = None) -> int: ...

    @abstractmethod
    async def list_all(
        self, q: str | None = None, offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT
    ) -> list[Post]: ...

    @abstractmethod
    async def get_by_id(self, post_id: str) -> Post: ...

    async def get_all_posts(
        self, q: str | None = None, offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT
    ) -> PostPage:
        """Fetch a page and the total count concurrently and join them.

        The first failure propagates; the sibling request is left to finish.
        """
        query = PostQuery(q=q, offset=offset, limit=limit)
        items, total = await asyncio.gather(
            self.list_all(query.q, query.offset, query.limit),
            self.count_all(query.q),
        )
        await log.ainfo("posts_page_fetched", q=q, items=len(items), total=total)
        return PostPage(items=items, total_count=total)

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self._transport.aclose()

    async def __aenter__(self) -> BasePostClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


class RemotePostClient(BasePostClient):
    """Posts client issuing requests directly through a RestTransport."""

    async def count_all(self, q: str | None = None) -> int:
        params = {"q": q} if q is not None else None
        resp = await self._transport.get(COUNT_PATH, params=params, operation="count_all")
        return decode(resp, PostCount)

    async def list_all(
        self, q: str | None = None, offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT
    ) -> list[Post]:
        query = PostQuery(q=q, offset=offset, limit=limit)
        resp = await self._transport.get(
            POSTS_PATH, params=query.to_params(), operation="list_all"
        )
        return await clip_to_limit(decode(resp, list[Post]), query.limit)

    async def get_by_id(self, post_id: str) -> Post:
        require_post_id(post_id)
        resp = await self._transport.get(
            f"{POSTS_PATH}/{quote(post_id, safe='')}",
            operation="get_by_id",
            resource_id=post_id,
        )
        return decode(resp, Post)
