"""Per-attempt response handling shared by both request pipelines.

:func:`decode_response` turns one :class:`httpx.Response` into a decoded
JSON value or the :class:`~skyfetch.exceptions.FetchError` subclass that
describes why the attempt failed. Keeping this in one place guarantees the
blocking and non-blocking pipelines classify failures identically.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from skyfetch.exceptions import DecodeError, HttpStatusError


def decode_response(response: httpx.Response) -> Any:
    """Decode the JSON body of a successful response.

    Args:
        response: The :class:`httpx.Response` of a single attempt.

    Returns:
        The decoded JSON value (``dict``, ``list``, scalar or ``None``).

    Raises:
        HttpStatusError: If the status code is outside the 2xx range.
        DecodeError: If the body is empty or not valid JSON.
    """
    if not response.is_success:
        raise HttpStatusError(response.status_code, str(response.request.url))

    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Invalid JSON body: {exc}") from exc


def backoff_delay(attempt: int) -> int:
    """Seconds to wait after the zero-based *attempt* failed: 1, 2, 4, ..."""
    return 2 ** attempt
