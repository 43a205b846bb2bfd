"""HTTP transport that turns raw httpx traffic into domain results and errors."""

from __future__ import annotations

import time
from types import TracebackType
from typing import Any

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from remote_posts.config import ClientEndpoint
from remote_posts.error_mapping import ErrorMapper, FailedResponse, not_found_mapper
from remote_posts.errors import DecodeError, HttpStatusError, TransportError
from remote_posts.metrics import rest_request_duration, rest_requests_total
from remote_posts.telemetry import get_tracer

log = structlog.get_logger()
_tracer = get_tracer(__name__)

_adapters: dict[Any, TypeAdapter[Any]] = {}


def _adapter(target: Any) -> TypeAdapter[Any]:
    adapter = _adapters.get(target)
    if adapter is None:
        adapter = _adapters[target] = TypeAdapter(target)
    return adapter


def decode(response: httpx.Response, target: Any) -> Any:
    """Validate a response body against *target*.

    Raises:
        DecodeError: If the body is not valid JSON of the expected type.
    """
    try:
        return _adapter(target).validate_json(response.content)
    except ValidationError as exc:
        raise DecodeError(
            f"Response from {response.request.url} is not a valid {target!r}: "
            f"{exc.error_count()} validation error(s)",
            body=response.text,
        ) from exc


class RestTransport:
    """Owns one httpx.AsyncClient and its connection pool for a client instance."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        error_mapper: ErrorMapper = not_found_mapper,
    ) -> None:
        self._client = client
        self._error_mapper = error_mapper
        self._closed = False

    @classmethod
    def from_endpoint(
        cls,
        endpoint: ClientEndpoint,
        *,
        error_mapper: ErrorMapper = not_found_mapper,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RestTransport:
        """Create a transport with its own connection pool for *endpoint*."""
        client = httpx.AsyncClient(
            base_url=endpoint.url.rstrip("/"),
            headers={"Accept": "application/json", **endpoint.headers},
            timeout=httpx.Timeout(endpoint.timeout),
            limits=httpx.Limits(
                max_connections=endpoint.max_connections,
                max_keepalive_connections=endpoint.max_connections,
            ),
            transport=transport,
        )
        return cls(client, error_mapper=error_mapper)

    @property
    def base_url(self) -> httpx.URL:
        return self._client.base_url

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        operation: str = "get",
        resource_id: str | None = None,
    ) -> httpx.Response:
        """Send a GET and return the response if its status is 2xx.

        Raises:
            TransportError: On connection, timeout, protocol or redirect failures.
            DecodeError: If the body cannot be decompressed per its Content-Encoding.
            HttpStatusError: On non-2xx status with no mapped domain error.
            Exception: Whatever the error mapper returns for the failed response.
        """
        start = time.monotonic()
        outcome = "error"
        with _tracer.start_as_current_span(
            f"rest.{operation}", attributes={"http.method": "GET", "url.path": path}
        ) as span:
            try:
                try:
                    resp = await self._client.get(path, params=params)
                except httpx.DecodingError as exc:
                    outcome = "decode_error"
                    await log.awarning(
                        "rest_response_undecodable", operation=operation, path=path, error=str(exc)
                    )
                    raise DecodeError(f"GET {path} returned an undecodable body: {exc}") from exc
                except httpx.RequestError as exc:
                    outcome = "transport_error"
                    await log.awarning(
                        "rest_request_failed", operation=operation, path=path, error=str(exc)
                    )
                    raise TransportError(f"GET {path} failed: {exc}", cause=exc) from exc

                span.set_attribute("http.status_code", resp.status_code)
                if not resp.is_success:
                    outcome = f"http_{resp.status_code}"
                    raise self._map_failure(resp, resource_id)

                outcome = "success"
                return resp
            finally:
                elapsed = time.monotonic() - start
                rest_requests_total.add(1, {"operation": operation, "outcome": outcome})
                rest_request_duration.record(elapsed, {"operation": operation})
                await log.adebug(
                    "rest_request_complete",
                    operation=operation,
                    path=path,
                    outcome=outcome,
                    duration=round(elapsed, 4),
                )

    def _map_failure(self, resp: httpx.Response, resource_id: str | None) -> Exception:
        failed = FailedResponse(
            status_code=resp.status_code,
            body=resp.text,
            method=resp.request.method,
            url=str(resp.request.url),
            resource_id=resource_id,
        )
        mapped = self._error_mapper(failed)
        if mapped is not None:
            return mapped
        return HttpStatusError(resp.status_code, resp.text)

    async def aclose(self) -> None:
        """Close the underlying HTTP client. Safe to call more than once."""
        if not self._closed:
            self._closed = True
            await self._client.aclose()

    async def __aenter__(self) -> RestTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
