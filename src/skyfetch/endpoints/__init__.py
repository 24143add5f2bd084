"""Endpoint configuration for every data category skyfetch exposes.

Each category is an :class:`Endpoint` record in
:mod:`skyfetch.endpoints.catalog`; :class:`~skyfetch.facade.SpaceDataClient`
turns a record plus the caller's values into a URL and cache key for the
request pipeline, then runs the record's transform on the result.

Modules:
    base: The :class:`Endpoint` record.
    catalog: The endpoint table.
    formatters: Transforms for the meteorite, star, comet and asteroid catalogs.
    images: APOD-backed image lookups and their fallbacks.
"""

from skyfetch.endpoints.base import Endpoint
from skyfetch.endpoints.catalog import ENDPOINTS

__all__ = ["Endpoint", "ENDPOINTS"]
