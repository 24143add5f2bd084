"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~skyfetch.exceptions.SkyfetchError` subclass.
Shell wrappers can inspect the exit code to tell a network outage apart
from a malformed payload without parsing stderr.

Example::

    $ skyfetch weather flares
    $ echo $?
    5   # EXIT_RETRIES_EXHAUSTED -- every attempt failed
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_RETRIES_EXHAUSTED = 5
"""Every request attempt failed; the last error is reported."""

EXIT_FETCH_ERROR = 6
"""A single request attempt failed (network, HTTP status or JSON decoding)."""

EXIT_PAYLOAD_ERROR = 7
"""The request succeeded but the payload did not have the expected shape."""
