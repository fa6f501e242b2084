"""Shared async HTTP client for the catalog and store APIs.

Status-based retries live in :mod:`shelfsync.adapters.gateway`; this client only
retries failed connects (through the httpx transport) and throttles outgoing
calls when the service publishes a request quota.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Self, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter

from shelfsync.config.http_resilience import ResilienceConfig

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, TimeoutTypes, URLTypes


class RequestOptions(TypedDict, total=False):
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.AsyncBaseTransport


class ResilientClient:
    """One ``httpx.AsyncClient`` per remote system, closed when the run ends.

    ``transport`` replaces the connect-retrying default, which is how tests route
    requests into ``httpx.MockTransport`` handlers.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        quota = config.ratelimit
        self._limiter = AsyncLimiter(quota.max_calls, quota.per_seconds) if quota else None

        options: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": transport or httpx.AsyncHTTPTransport(retries=config.connect_retries),
        }
        if config.base_url is not None:
            options["base_url"] = config.base_url
        if config.default_headers:
            options["headers"] = dict(config.default_headers)
        self._client = httpx.AsyncClient(**options)

    async def __aenter__(self) -> Self:
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
        if self._limiter is None:
            return await self._client.request(method, url, **kwargs)
        async with self._limiter:
            return await self._client.request(method, url, **kwargs)


ClientFactory = Callable[[ResilienceConfig], ResilientClient]
