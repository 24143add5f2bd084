"""In-memory response caching for skyfetch.

This package provides :class:`ResponseCache`, the time-bounded store
consulted by the request pipelines before every network call. Entries are
keyed by a caller-chosen string and stamped with the pipeline's clock; the
lifetime is supplied per lookup, so one cache serves endpoints with
different TTLs.

The cache lives only as long as the process and is owned by whichever
pipeline (and through it, :class:`~skyfetch.facade.SpaceDataClient`) was
constructed with it.
"""

from skyfetch.cache.cache import ResponseCache

__all__ = ["ResponseCache"]
