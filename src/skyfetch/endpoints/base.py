"""The :class:`Endpoint` configuration record.

An endpoint describes one data category completely: where it lives, which
caller values become path segments or query parameters, how its cache key
is formed, how long responses stay fresh and how the decoded payload is
reshaped. The request pipeline knows nothing about any of this; the facade
pairs an endpoint with the pipeline for each call.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional
from urllib.parse import quote

import httpx

from skyfetch.exceptions import PayloadError


def _identity(payload: Any) -> Any:
    return payload


def _placeholders(template: str) -> list[str]:
    return [name for _, name, _, _ in string.Formatter().parse(template) if name]


@dataclass(frozen=True)
class Endpoint:
    """Configuration for one data category.

    Attributes:
        name: Identifier used in log messages and :class:`PayloadError`.
        url: Base URL; ``{name}`` placeholders are filled from the call's
            values and URL-quoted.
        query: Value names sent as query parameters, in order, when not
            ``None``.
        static_query: Fixed ``(name, value)`` pairs sent before the
            per-call parameters. Repeated names are allowed.
        cache_key: :meth:`str.format` template for the cache key, or
            ``None`` to bypass the cache.
        key_defaults: Substitutes for ``None`` values in the cache key.
        ttl: Seconds a cached response stays fresh; ``None`` defers to
            :attr:`~skyfetch.models.CacheConfig.default_ttl_seconds`.
        requires_key: Whether ``api_key`` is appended to the query.
        transform: Reshapes the decoded payload. Missing fields surface as
            :class:`PayloadError`.
    """

    name: str
    url: str
    query: tuple[str, ...] = ()
    static_query: tuple[tuple[str, str], ...] = ()
    cache_key: Optional[str] = None
    key_defaults: Mapping[str, str] = field(default_factory=dict)
    ttl: Optional[float] = None
    requires_key: bool = True
    transform: Callable[[Any], Any] = _identity

    def build_url(self, values: Mapping[str, Any], api_key: Optional[str] = None) -> str:
        """Return the absolute request URL for *values*.

        Raises:
            KeyError: If a path placeholder has no value.
        """
        path_values = {name: quote(str(values[name]), safe="") for name in _placeholders(self.url)}
        base = self.url.format(**path_values)

        params: list[tuple[str, str]] = list(self.static_query)
        for name in self.query:
            value = values.get(name)
            if value is not None:
                params.append((name, _query_value(value)))
        if self.requires_key and api_key:
            params.append(("api_key", api_key))

        return str(httpx.URL(base, params=params))

    def build_cache_key(self, values: Mapping[str, Any]) -> Optional[str]:
        """Return the cache key for *values*, or ``None`` when uncached."""
        if self.cache_key is None:
            return None
        filled = {}
        for name in _placeholders(self.cache_key):
            value = values.get(name)
            filled[name] = self.key_defaults.get(name, "") if value is None else value
        return self.cache_key.format(**filled)

    def apply(self, payload: Any) -> Any:
        """Run :attr:`transform` on a decoded payload.

        Raises:
            PayloadError: If the payload lacks the structure the transform
                expects.
        """
        try:
            return self.transform(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise PayloadError(f"unexpected payload ({type(exc).__name__}: {exc})", self.name) from exc


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
