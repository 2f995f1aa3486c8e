"""Rate-limited, retrying async HTTP client for GraphQL endpoints."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from cms_management.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy

__all__ = ["ResilientClient", "build_limiter", "build_retry"]

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=sorted(policy.allowed_methods),
        status_forcelist=sorted(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


def build_limiter(ratelimit: RateLimit | None) -> AsyncLimiter | None:
    if ratelimit is None:
        return None
    return AsyncLimiter(ratelimit.max_calls, ratelimit.per_seconds)


class ResilientClient:
    """``httpx.AsyncClient`` posting GraphQL documents with retries and rate limiting.

    Retries happen at the transport level (``httpx_retries``), so every call made
    through :meth:`execute` consumes exactly one limiter slot regardless of how many
    attempts the transport needed.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter = build_limiter(config.ratelimit)
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout_seconds,
            headers=dict(config.default_headers or {}),
            transport=RetryTransport(transport=transport, retry=build_retry(config.retry)),
        )

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

    async def execute(
        self,
        url: str,
        query: str,
        variables: Mapping[str, object],
    ) -> object:
        """POST a GraphQL document and return the decoded JSON body.

        Non-2xx answers raise :class:`httpx.HTTPStatusError`; GraphQL-level errors
        are part of the returned body and left to the caller.
        """

        body = {"query": query, "variables": dict(variables)}
        if self._limiter is None:
            response = await self._client.post(url, json=body)
        else:
            async with self._limiter:
                response = await self._client.post(url, json=body)
        log.debug("%s answered %s for %s", self.config.name, response.status_code, url)
        response.raise_for_status()
        return response.json()
