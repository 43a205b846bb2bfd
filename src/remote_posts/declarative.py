"""Declarative REST resources: describe endpoints as annotated methods.

A method decorated with :func:`get` is never executed. Calling it binds the
arguments against the method signature: names that appear in the path template
are substituted into the path, every other non-``None`` argument is sent as a
query parameter, and the response body is validated against the return
annotation.
"""

from __future__ import annotations

import functools
import inspect
import re
import typing
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field

from remote_posts.config import Settings
from remote_posts.error_mapping import ErrorMapper, not_found_mapper
from remote_posts.transport import RestTransport, decode

_PATH_PARAM = re.compile(r"\{(\w+)\}")

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])
R = TypeVar("R", bound="RestResource")


class Route(BaseModel):
    """Routing metadata attached to a declared endpoint."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(default="GET", description="HTTP method")
    path: str = Field(description="Path template relative to the base URL")
    resource_arg: str | None = Field(
        default=None, description="Argument identifying the resource for error mapping"
    )

    @property
    def path_params(self) -> list[str]:
        return _PATH_PARAM.findall(self.path)


def get(path: str, *, resource_arg: str | None = None) -> Callable[[F], F]:
    """Declare a GET endpoint on a RestResource method."""
    route = Route(method="GET", path=path, resource_arg=resource_arg)

    def decorator(func: F) -> F:
        sig = inspect.signature(func)
        missing = [name for name in route.path_params if name not in sig.parameters]
        if missing:
            raise TypeError(f"{func.__qualname__}: path parameters {missing} not in signature")
        if resource_arg is not None and resource_arg not in sig.parameters:
            raise TypeError(f"{func.__qualname__}: unknown resource_arg {resource_arg!r}")

        @functools.cache
        def _return_type() -> Any:
            return typing.get_type_hints(func, include_extras=True).get("return", Any)

        @functools.wraps(func)
        async def wrapper(self: RestResource, *args: Any, **kwargs: Any) -> Any:
            bound = sig.bind(self, *args, **kwargs)
            bound.apply_defaults()
            arguments = {k: v for k, v in bound.arguments.items() if k != "self"}

            path_values = {
                name: quote(str(arguments.pop(name)), safe="") for name in route.path_params
            }
            params = {k: v for k, v in arguments.items() if v is not None}
            resource_id = str(bound.arguments[resource_arg]) if resource_arg else None

            resp = await self.transport.get(
                route.path.format(**path_values),
                params=params or None,
                operation=func.__name__,
                resource_id=resource_id,
            )
            return decode(resp, _return_type())

        wrapper.__rest_route__ = route  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator


def route_of(method: Callable[..., Any]) -> Route | None:
    """Return the Route declared on *method*, if any."""
    return getattr(method, "__rest_route__", None)


class RestResource:
    """Base class for declarative resources bound to a RestTransport."""

    config_key: ClassVar[str]

    def __init__(self, transport: RestTransport) -> None:
        self.transport = transport

    @classmethod
    def from_settings(
        cls: type[R],
        settings: Settings,
        *,
        config_key: str | None = None,
        error_mapper: ErrorMapper = not_found_mapper,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> R:
        """Build the resource with the endpoint registered under its config key."""
        endpoint = settings.client_registry.require(config_key or cls.config_key)
        return cls(
            RestTransport.from_endpoint(endpoint, error_mapper=error_mapper, transport=transport)
        )

    @classmethod
    def routes(cls) -> dict[str, Route]:
        """All declared endpoints on this resource, keyed by method name."""
        found: dict[str, Route] = {}
        for name, member in inspect.getmembers(cls, inspect.isfunction):
            route = route_of(member)
            if route is not None:
                found[name] = route
        return found
