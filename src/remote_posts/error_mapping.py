"""Pluggable translation of non-2xx responses into domain errors.

A mapper is a plain function that receives a :class:`FailedResponse` and returns
an exception to raise, or ``None`` to fall back to a generic
:class:`~remote_posts.errors.HttpStatusError`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from remote_posts.errors import NotFoundError


class FailedResponse(BaseModel):
    """Everything a mapper may inspect about a failed call."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(description="HTTP status code")
    body: str = Field(default="", description="Raw response body")
    method: str = Field(default="GET", description="HTTP method of the request")
    url: str = Field(default="", description="Full request URL")
    resource_id: str | None = Field(
        default=None, description="Identifier of the requested resource, if any"
    )


ErrorMapper = Callable[[FailedResponse], Exception | None]


def no_mapping(response: FailedResponse) -> Exception | None:
    return None


def not_found_mapper(response: FailedResponse) -> Exception | None:
    """Map 404 on a lookup-by-id call to NotFoundError."""
    if response.status_code == 404 and response.resource_id is not None:
        return NotFoundError(response.resource_id, response.body)
    return None


def status_mapper(
    factories: Mapping[int, Callable[[FailedResponse], Exception]],
) -> ErrorMapper:
    """Build a mapper from a status code → exception factory table."""
    table = dict(factories)

    def _map(response: FailedResponse) -> Exception | None:
        factory = table.get(response.status_code)
        return factory(response) if factory else None

    return _map


def chain_mappers(*mappers: ErrorMapper) -> ErrorMapper:
    """Combine mappers; the first one returning an exception wins."""

    def _map(response: FailedResponse) -> Exception | None:
        for mapper in mappers:
            error = mapper(response)
            if error is not None:
                return error
        return None

    return _map
