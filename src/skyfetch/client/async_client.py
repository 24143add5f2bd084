"""Non-blocking request pipeline built on :class:`httpx.AsyncClient`.

Mirrors :class:`~skyfetch.client.sync_client.RequestPipeline` step for
step; the only difference is that the network call and the backoff delay
are awaited, so a retrying request suspends only its own coroutine.

Both pipelines may share one :class:`~skyfetch.cache.ResponseCache`.
Concurrent coroutines that miss the cache for the same key each perform
their own fetch and the last to finish overwrites the entry.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

import httpx

from skyfetch.cache import ResponseCache
from skyfetch.client.response import backoff_delay, decode_response
from skyfetch.exceptions import FetchError, RetriesExhausted, TransportError
from skyfetch.models import DEFAULT_TTL_SECONDS, RequestConfig
from skyfetch.output import get_output


class AsyncRequestPipeline:
    """Non-blocking fetch-with-cache pipeline.

    Must be used as an async context manager (or closed with
    :meth:`aclose`) when it creates its own client.

    Args:
        cache: Response cache; a private one is created when omitted.
        config: Timeout, SSL verification and default attempt count.
        client: Pre-built :class:`httpx.AsyncClient`.
        clock: Returns the current time in seconds.
        sleep: Coroutine function suspending the caller for N seconds.

    Example::

        async with AsyncRequestPipeline() as pipeline:
            data = await pipeline.fetch_with_cache(url, cache_key="comets")
    """

    def __init__(
        self,
        cache: Optional[ResponseCache] = None,
        config: Optional[RequestConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._cache = cache if cache is not None else ResponseCache()
        self._config = config or RequestConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )
        self._clock = clock
        self._sleep = sleep

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    async def __aenter__(self) -> AsyncRequestPipeline:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this pipeline created it."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_with_cache(
        self,
        url: str,
        cache_key: Optional[str] = None,
        ttl: float = DEFAULT_TTL_SECONDS,
        max_attempts: Optional[int] = None,
    ) -> Any:
        """Return the decoded JSON at *url*, from the cache when fresh.

        Behaves identically to
        :meth:`~skyfetch.client.sync_client.RequestPipeline.fetch_with_cache`
        but is non-blocking.

        Raises:
            RetriesExhausted: If every attempt failed.
            ValueError: If *max_attempts* is below 1.
        """
        attempts = self._config.max_attempts if max_attempts is None else max_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {attempts}")

        if cache_key is not None:
            entry = self._cache.get_fresh(cache_key, self._clock(), ttl)
            if entry is not None:
                get_output().debug(f"Cache hit: {cache_key}")
                return entry.value

        output = get_output()
        last_error: Optional[FetchError] = None

        for attempt in range(attempts):
            try:
                data = await self._attempt(url)
            except FetchError as exc:
                last_error = exc
                output.debug(f"Request attempt {attempt + 1}/{attempts} failed: {exc}")
                if attempt < attempts - 1:
                    delay = backoff_delay(attempt)
                    output.debug(f"Retrying in {delay}s")
                    await self._sleep(delay)
                continue

            if cache_key is not None:
                self._cache.put(cache_key, data, self._clock())
            return data

        assert last_error is not None
        raise RetriesExhausted(last_error, attempts, url) from last_error

    async def _attempt(self, url: str) -> Any:
        try:
            response = await self._client.get(url)
        except httpx.TransportError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
        return decode_response(response)
