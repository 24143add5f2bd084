"""Blocking request pipeline: cache lookup, fetch, retry with backoff, cache store.

This module provides :class:`RequestPipeline`, the single path through which
every :class:`~skyfetch.facade.SpaceDataClient` accessor reaches the
network. It wraps :class:`httpx.Client` and layers on:

- **Cache-first lookup** -- a fresh entry for the caller's cache key is
  returned without any network access.
- **Retry with backoff** -- every failure (transport error, non-2xx
  status, undecodable body) is retried up to ``max_attempts`` times with
  an exponential delay between attempts (1 s, 2 s, 4 s, ...). No delay
  follows the final attempt.
- **Cache store** -- the decoded value of a successful attempt is stored
  under the cache key, stamped with the clock reading at that moment.

The clock and the delay primitive are injectable so tests can drive time
explicitly.

See Also:
    :class:`~skyfetch.client.async_client.AsyncRequestPipeline` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import httpx

from skyfetch.cache import ResponseCache
from skyfetch.client.response import backoff_delay, decode_response
from skyfetch.exceptions import FetchError, RetriesExhausted, TransportError
from skyfetch.models import DEFAULT_TTL_SECONDS, RequestConfig
from skyfetch.output import get_output


class RequestPipeline:
    """Blocking fetch-with-cache pipeline.

    Args:
        cache: Response cache consulted before and filled after each fetch.
            A private :class:`~skyfetch.cache.ResponseCache` is created
            when omitted.
        config: Timeout, SSL verification and default attempt count.
        client: Pre-built :class:`httpx.Client` (e.g. one with a mock
            transport). When omitted, one is created from *config* and
            closed by :meth:`close`.
        clock: Returns the current time in seconds; used for TTL checks and
            cache stamps.
        sleep: Blocks the caller for the given number of seconds.

    Example::

        with RequestPipeline() as pipeline:
            data = pipeline.fetch_with_cache(url, cache_key="apod_today")
    """

    def __init__(
        self,
        cache: Optional[ResponseCache] = None,
        config: Optional[RequestConfig] = None,
        client: Optional[httpx.Client] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._cache = cache if cache is not None else ResponseCache()
        self._config = config or RequestConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )
        self._clock = clock
        self._sleep = sleep

    @property
    def cache(self) -> ResponseCache:
        """The response cache used by this pipeline."""
        return self._cache

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> RequestPipeline:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client` if this pipeline created it."""
        if self._owns_client:
            self._client.close()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def fetch_with_cache(
        self,
        url: str,
        cache_key: Optional[str] = None,
        ttl: float = DEFAULT_TTL_SECONDS,
        max_attempts: Optional[int] = None,
    ) -> Any:
        """Return the decoded JSON at *url*, from the cache when fresh.

        Args:
            url: Absolute URL to GET, query string included.
            cache_key: Key under which the decoded value is cached. ``None``
                bypasses the cache in both directions.
            ttl: Seconds a cached value stays fresh.
            max_attempts: Attempts before giving up. Defaults to
                :attr:`RequestConfig.max_attempts`.

        Returns:
            The decoded JSON value.

        Raises:
            RetriesExhausted: If every attempt failed. ``last_error`` holds
                the final :class:`~skyfetch.exceptions.FetchError`.
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
                data = self._attempt(url)
            except FetchError as exc:
                last_error = exc
                output.debug(f"Request attempt {attempt + 1}/{attempts} failed: {exc}")
                if attempt < attempts - 1:
                    delay = backoff_delay(attempt)
                    output.debug(f"Retrying in {delay}s")
                    self._sleep(delay)
                continue

            if cache_key is not None:
                self._cache.put(cache_key, data, self._clock())
            return data

        assert last_error is not None
        raise RetriesExhausted(last_error, attempts, url) from last_error

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _attempt(self, url: str) -> Any:
        """Perform one GET and decode it, mapping transport failures."""
        try:
            response = self._client.get(url)
        except httpx.TransportError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
        return decode_response(response)
