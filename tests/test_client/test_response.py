"""Tests for per-attempt response decoding."""

from __future__ import annotations

import httpx
import pytest

from skyfetch.client.response import backoff_delay, decode_response
from skyfetch.exceptions import DecodeError, FetchError, HttpStatusError


def _make_response(status_code: int = 200, **kwargs) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        request=httpx.Request("GET", "https://api.example.com/test"),
        **kwargs,
    )


class TestDecodeResponse:
    def test_object_body(self) -> None:
        assert decode_response(_make_response(json={"url": "x"})) == {"url": "x"}

    def test_array_body(self) -> None:
        assert decode_response(_make_response(json=[1, 2])) == [1, 2]

    def test_non_success_status(self) -> None:
        with pytest.raises(HttpStatusError) as exc_info:
            decode_response(_make_response(429, json={"error": "slow down"}))
        assert exc_info.value.status_code == 429
        assert exc_info.value.url == "https://api.example.com/test"
        assert str(exc_info.value) == "HTTP error! Status: 429"

    def test_redirect_status_is_a_failure(self) -> None:
        with pytest.raises(HttpStatusError):
            decode_response(_make_response(304))

    def test_invalid_json(self) -> None:
        with pytest.raises(DecodeError):
            decode_response(_make_response(content=b"{broken"))

    def test_empty_body(self) -> None:
        with pytest.raises(DecodeError):
            decode_response(_make_response(content=b""))

    def test_errors_are_fetch_errors(self) -> None:
        assert issubclass(HttpStatusError, FetchError)
        assert issubclass(DecodeError, FetchError)


class TestBackoffDelay:
    @pytest.mark.parametrize("attempt,expected", [(0, 1), (1, 2), (2, 4), (3, 8)])
    def test_doubles(self, attempt: int, expected: int) -> None:
        assert backoff_delay(attempt) == expected
