"""Request pipelines for skyfetch.

Both pipelines wrap :mod:`httpx` and implement the same fetch-with-cache
operation: return a fresh cached value when one exists, otherwise GET the
URL up to ``max_attempts`` times with exponential backoff and cache the
decoded result.

Classes:
    :class:`RequestPipeline` -- blocking pipeline backed by :class:`httpx.Client`.
    :class:`AsyncRequestPipeline` -- non-blocking pipeline backed by
    :class:`httpx.AsyncClient`.

Example::

    from skyfetch.client import RequestPipeline

    with RequestPipeline() as pipeline:
        bodies = pipeline.fetch_with_cache(url, cache_key="comets", ttl=86400)
"""

from skyfetch.client.async_client import AsyncRequestPipeline
from skyfetch.client.sync_client import RequestPipeline

__all__ = ["RequestPipeline", "AsyncRequestPipeline"]
