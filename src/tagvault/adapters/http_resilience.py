from __future__ import annotations

import asyncio
from typing import (
    TYPE_CHECKING,
    NoReturn,
    TypedDict,
    TypeVar,
    Unpack,
)

import httpx
from httpx_retries import RetryTransport

from tagvault.config.http_resilience import ResilienceConfig, RetryPolicy
from tagvault.domain.errors import ContextExpiredError, TransportError

if TYPE_CHECKING:
    from collections.abc import Awaitable
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import (
        AuthTypes,
        HeaderTypes,
        QueryParamTypes,
        RequestContent,
        TimeoutTypes,
        URLTypes,
    )

    from tagvault.domain.context import InvocationContext

__all__ = [
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "raise_transport_error",
    "request_timeout",
    "within_deadline",
]


class RequestOptions(TypedDict, total=False):
    content: RequestContent | None
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    auth: AuthTypes | UseClientDefault | None
    timeout: TimeoutTypes | UseClientDefault


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    transport: httpx.AsyncBaseTransport
    auth: AuthTypes


class ResilientClient:
    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config

        retry_transport = RetryTransport(retry=config.retry.build())

        client_kwargs: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": retry_transport,
        }
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url
        if config.auth is not None:
            client_kwargs["auth"] = config.auth

        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self._client.request(method, url, **kwargs)

    async def get(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def delete(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)


def request_timeout(ctx: InvocationContext, config: ResilienceConfig) -> float:
    """Timeout for a single attempt, bounded by what is left of the context deadline.

    This only bounds one attempt; :func:`within_deadline` bounds the whole call
    including retries and backoff.
    """
    remaining = ctx.remaining()
    if remaining is None:
        return config.timeout_seconds
    return min(config.timeout_seconds, remaining)


T = TypeVar("T")


async def within_deadline(ctx: InvocationContext, awaitable: Awaitable[T]) -> T:
    """Await ``awaitable`` but give up once the context deadline passes."""
    remaining = ctx.remaining()
    if remaining is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=remaining)
    except TimeoutError as exc:
        raise ContextExpiredError("context deadline exceeded") from exc


def raise_transport_error(exc: httpx.HTTPError) -> NoReturn:
    """Re-raise an httpx failure as a :class:`TransportError` with its text intact."""
    status = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
    raise TransportError(str(exc) or type(exc).__name__, status=status) from exc
