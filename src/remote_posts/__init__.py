"""Typed async client for a remote posts REST resource."""

from remote_posts.client import PostClientProtocol, RemotePostClient
from remote_posts.error_mapping import (
    ErrorMapper,
    FailedResponse,
    chain_mappers,
    no_mapping,
    not_found_mapper,
    status_mapper,
)
from remote_posts.errors import (
    DecodeError,
    HttpStatusError,
    NotFoundError,
    PostClientError,
    TransportError,
)
from remote_posts.factory import RemotePostClientBuilder, create_post_client
from remote_posts.models import Post, PostCount, PostPage, PostQuery
from remote_posts.posts_api import DeclarativePostClient, PostsApi

__all__ = [
    "DecodeError",
    "DeclarativePostClient",
    "ErrorMapper",
    "FailedResponse",
    "HttpStatusError",
    "NotFoundError",
    "Post",
    "PostClientError",
    "PostClientProtocol",
    "PostCount",
    "PostPage",
    "PostQuery",
    "PostsApi",
    "RemotePostClient",
    "RemotePostClientBuilder",
    "TransportError",
    "chain_mappers",
    "create_post_client",
    "no_mapping",
    "not_found_mapper",
    "status_mapper",
]
