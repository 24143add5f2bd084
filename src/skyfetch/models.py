"""Canonical data models shared across all skyfetch modules.

The models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`CacheConfig`, :class:`OutputConfig`
    and :class:`GlobalConfig`.

**Cache records** -- :class:`CacheEntry`, a frozen dataclass so that the
stored value is kept by reference rather than validated or copied.

**Accessor results** -- :class:`ImageResult`, returned by every image
lookup on :class:`~skyfetch.facade.SpaceDataClient`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, Field


DEFAULT_TTL_SECONDS = 3600.0
"""Default cache lifetime for a response (one hour)."""

DEFAULT_MAX_ATTEMPTS = 3
"""Default number of attempts made by the request pipeline."""


# --- Configuration ---


class RequestConfig(BaseModel):
    """HTTP request settings applied to every call made by the pipeline."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS, ge=1, description="Attempts per request"
    )


class CacheConfig(BaseModel):
    """In-memory response cache settings."""

    enabled: bool = Field(default=True, description="Enable response caching")
    default_ttl_seconds: float = Field(
        default=DEFAULT_TTL_SECONDS, description="TTL for endpoints without their own"
    )


class OutputConfig(BaseModel):
    """Default output format preferences."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/skyfetch/config.json``.

    Loaded and saved by :func:`~skyfetch.config.load_global_config` and
    :func:`~skyfetch.config.save_global_config`. See
    :func:`~skyfetch.config.resolve_api_key` for how ``api_key_source``
    combines with the CLI flag and environment variables.
    """

    api_key_source: Optional[str] = Field(
        default=None,
        description="Credential source for the API key: env:VAR, file:/path, prompt",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Cache records ---


@dataclass(frozen=True)
class CacheEntry:
    """A decoded response and the clock reading at which it was stored.

    Attributes:
        value: The decoded JSON value, kept by reference.
        stored_at: Timestamp from the pipeline's clock.
    """

    value: Any
    stored_at: float


# --- Accessor results ---


class ImageSource(str, enum.Enum):
    """Where the URL of an :class:`ImageResult` came from."""

    API = "api"
    FALLBACK = "fallback"


class FallbackReason(str, enum.Enum):
    """Why an image lookup substituted a fallback.

    ``FETCH_FAILED`` means every attempt of the request failed;
    ``UNEXPECTED_PAYLOAD`` means the request succeeded but the payload had
    no usable ``url``.
    """

    FETCH_FAILED = "fetch_failed"
    UNEXPECTED_PAYLOAD = "unexpected_payload"
    NOT_CONFIGURED = "not_configured"


class ImageResult(BaseModel):
    """An image URL with its title and date, as returned by image lookups."""

    url: str
    title: str
    date: str
    source: ImageSource = ImageSource.API
    fallback_reason: Optional[FallbackReason] = None

    @property
    def is_fallback(self) -> bool:
        return self.source == ImageSource.FALLBACK
