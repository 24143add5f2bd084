"""Exception hierarchy for skyfetch.

All exceptions inherit from :class:`SkyfetchError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`skyfetch.exit_codes`.
The CLI entry point in :func:`skyfetch.app.main` catches ``SkyfetchError``
and exits with the appropriate code.

Per-attempt failures (:class:`FetchError` and its subclasses) are raised
inside the request pipeline and drive its retry loop; callers only ever
see :class:`RetriesExhausted`, which wraps the last of them.

Subclass hierarchy::

    SkyfetchError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConfigError         (exit 1)
    +-- FetchError          (exit 6)
    |   +-- TransportError
    |   +-- HttpStatusError
    |   +-- DecodeError
    +-- RetriesExhausted    (exit 5)
    +-- PayloadError        (exit 7)
"""

from __future__ import annotations

from typing import Optional

from skyfetch.exit_codes import (
    EXIT_FETCH_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PAYLOAD_ERROR,
    EXIT_RETRIES_EXHAUSTED,
)


class SkyfetchError(Exception):
    """Base exception for all skyfetch errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`skyfetch.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SkyfetchError):
    """Raised for invalid CLI arguments or accessor parameters."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(SkyfetchError):
    """Raised for configuration problems (invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE


class FetchError(SkyfetchError):
    """A single request attempt failed."""

    exit_code = EXIT_FETCH_ERROR


class TransportError(FetchError):
    """The network call itself could not complete (DNS, refused, timeout)."""


class HttpStatusError(FetchError):
    """The server answered with a non-success status code.

    Args:
        status_code: The HTTP status returned by the server.
        url: The requested URL.
    """

    def __init__(self, status_code: int, url: str = ""):
        super().__init__(f"HTTP error! Status: {status_code}")
        self.status_code = status_code
        self.url = url


class DecodeError(FetchError):
    """The response body could not be decoded as JSON."""


class RetriesExhausted(SkyfetchError):
    """Raised after every attempt of a request has failed.

    Attributes:
        last_error: The :class:`FetchError` raised by the final attempt.
        attempts: How many attempts were made.
        url: The requested URL.
    """

    exit_code = EXIT_RETRIES_EXHAUSTED

    def __init__(self, last_error: FetchError, attempts: int, url: str = ""):
        super().__init__(f"Request failed after {attempts} attempts: {last_error}")
        self.last_error = last_error
        self.attempts = attempts
        self.url = url


class PayloadError(SkyfetchError):
    """The request succeeded but the payload lacked an expected field.

    Args:
        message: Description of what was missing.
        endpoint: Name of the endpoint whose payload was rejected.
    """

    exit_code = EXIT_PAYLOAD_ERROR

    def __init__(self, message: str, endpoint: Optional[str] = None):
        prefix = f"{endpoint}: " if endpoint else ""
        super().__init__(f"{prefix}{message}")
        self.endpoint = endpoint
