"""HTTP endpoints that serve posts fetched through the remote client."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Query, Request

from remote_posts.client import PostClientProtocol
from remote_posts.errors import NotFoundError, PostClientError
from remote_posts.metrics import gateway_errors_total
from remote_posts.models import DEFAULT_LIMIT, DEFAULT_OFFSET, Post, PostPage

log = structlog.get_logger()

router = APIRouter()


def _client(request: Request) -> PostClientProtocol:
    return request.app.state.post_client  # type: ignore[no-any-return]


async def _upstream_failure(route: str, exc: PostClientError) -> HTTPException:
    gateway_errors_total.add(1, {"route": route, "error": type(exc).__name__})
    await log.awarning("upstream_request_failed", route=route, error=str(exc))
    return HTTPException(status_code=502, detail=f"Upstream error: {exc}")


@router.get("/posts", response_model=PostPage)
async def list_posts(
    request: Request,
    q: str | None = None,
    offset: int = Query(default=DEFAULT_OFFSET, ge=0),
    limit: int = Query(default=DEFAULT_LIMIT, gt=0),
) -> PostPage:
    try:
        return await _client(request).get_all_posts(q, offset, limit)
    except PostClientError as exc:
        raise await _upstream_failure("list_posts", exc) from exc


@router.get("/posts/count")
async def count_posts(request: Request, q: str | None = None) -> int:
    try:
        return await _client(request).count_all(q)
    except PostClientError as exc:
        raise await _upstream_failure("count_posts", exc) from exc


@router.get("/posts/{post_id}", response_model=Post)
async def read_post(request: Request, post_id: str) -> Post:
    try:
        return await _client(request).get_by_id(post_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Post not found") from exc
    except PostClientError as exc:
        raise await _upstream_failure("read_post", exc) from exc
