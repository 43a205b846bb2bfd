"""Domain errors raised by the posts client."""

from __future__ import annotations

from typing import Any


class PostClientError(Exception):
    """Base class for every failure surfaced by a posts client."""


class TransportError(PostClientError):
    """Connection or network failure before a response was received."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class DecodeError(PostClientError):
    """Response body does not match the expected shape or type."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class HttpStatusError(PostClientError):
    """Non-2xx response with no specific domain mapping."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.status_code, self.body)


class NotFoundError(HttpStatusError):
    """The requested resource does not exist on the remote side."""

    def __init__(self, resource_id: str, body: str = "") -> None:
        super().__init__(404, body)
        self.args = (f"Post not found: {resource_id}",)
        self.resource_id = resource_id

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.resource_id, self.body)
