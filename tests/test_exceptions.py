"""Tests for the exception hierarchy and its exit-code mapping."""

from __future__ import annotations

import pytest

from ccstatus.exceptions import (
    CCStatusError,
    ConfigError,
    DecodeError,
    FetchError,
    FetchErrorKind,
    HTTPError,
    NetworkError,
)
from ccstatus.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_ERROR,
    EXIT_NOT_FOUND,
)

URL = "https://status.example.com/api/v2/summary.json"


class TestExitCodes:
    @pytest.mark.parametrize(
        "exc, code",
        [
            (CCStatusError("x"), EXIT_GENERIC_FAILURE),
            (ConfigError("x"), EXIT_CONFIG_ERROR),
            (NetworkError("x", url=URL, attempts=3), EXIT_CONNECTION_ERROR),
            (DecodeError("x", url=URL, attempts=1), EXIT_DECODE_ERROR),
            (HTTPError("x", url=URL, attempts=1, status_code=500), EXIT_HTTP_ERROR),
            (HTTPError("x", url=URL, attempts=1, status_code=404), EXIT_NOT_FOUND),
        ],
    )
    def test_class_exit_code(self, exc: CCStatusError, code: int) -> None:
        assert exc.exit_code == code

    def test_explicit_override(self) -> None:
        assert ConfigError("x", exit_code=9).exit_code == 9
        # The class default is untouched.
        assert ConfigError("y").exit_code == EXIT_CONFIG_ERROR


class TestFetchErrorFields:
    def test_network_error_fields(self) -> None:
        cause = OSError("refused")
        err = NetworkError("Network error after 3 attempt(s): refused", url=URL, attempts=3, cause=cause)
        assert isinstance(err, FetchError)
        assert err.kind is FetchErrorKind.NETWORK
        assert err.url == URL
        assert err.attempts == 3
        assert err.cause is cause
        assert str(err) == "Network error after 3 attempt(s): refused"

    @pytest.mark.parametrize("status, retryable", [(429, True), (500, True), (503, True), (404, False), (400, False)])
    def test_http_error_retryable(self, status: int, retryable: bool) -> None:
        err = HTTPError("x", url=URL, attempts=1, status_code=status, status_text="", body="")
        assert err.kind is FetchErrorKind.HTTP
        assert err.retryable is retryable

    def test_kind_values(self) -> None:
        assert [k.value for k in FetchErrorKind] == ["network", "http", "decode"]
