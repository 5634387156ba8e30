"""Exception hierarchy for ccstatus.

All exceptions inherit from :class:`CCStatusError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`ccstatus.exit_codes`.
The top-level error handler in :func:`ccstatus.app.main` catches
``CCStatusError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Fetch failures are classified by :class:`FetchErrorKind` and carry
structured fields (URL, attempt count, underlying cause, and for HTTP
failures the status code, reason text and body) so callers never have to
parse the message text.

Subclass hierarchy::

    CCStatusError (exit 1)
    +-- ConfigError         (exit 3)
    +-- FetchError          (exit 1)
        +-- NetworkError    (exit 6)
        +-- HTTPError       (exit 5, or 4 for HTTP 404)
        +-- DecodeError     (exit 7)
"""

from __future__ import annotations

import enum
from typing import Optional

from ccstatus.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_ERROR,
    EXIT_NOT_FOUND,
)


class CCStatusError(Exception):
    """Base exception for all ccstatus errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`ccstatus.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(CCStatusError):
    """Raised for configuration problems (invalid JSON, unknown keys, out-of-range values)."""

    exit_code = EXIT_CONFIG_ERROR


class FetchErrorKind(str, enum.Enum):
    """Classification of a failed remote read."""

    NETWORK = "network"
    HTTP = "http"
    DECODE = "decode"


class FetchError(CCStatusError):
    """Base class for a remote read that failed terminally.

    Args:
        message: Human-readable description.
        url: The full request URL.
        attempts: How many attempts were made before giving up.
        cause: The underlying exception, if any.
    """

    kind: FetchErrorKind

    def __init__(
        self,
        message: str,
        url: str,
        attempts: int,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.attempts = attempts
        self.cause = cause


class NetworkError(FetchError):
    """Raised on transport failures (timeout, DNS resolution, connection refused) after all retries."""

    kind = FetchErrorKind.NETWORK
    exit_code = EXIT_CONNECTION_ERROR


class HTTPError(FetchError):
    """Raised when the API answers with a non-success status that is not retried, or retries ran out.

    Args:
        status_code: The HTTP status code of the last response.
        status_text: The reason phrase of the last response.
        body: The response body text, when it could be read.
    """

    kind = FetchErrorKind.HTTP
    exit_code = EXIT_HTTP_ERROR

    def __init__(
        self,
        message: str,
        url: str,
        attempts: int,
        status_code: int,
        status_text: str = "",
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message, url, attempts)
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        if status_code == 404:
            self.exit_code = EXIT_NOT_FOUND

    @property
    def retryable(self) -> bool:
        """Whether the status is one the client retries (429 or 5xx)."""
        return self.status_code == 429 or self.status_code >= 500


class DecodeError(FetchError):
    """Raised when a success response body is not valid JSON or does not match the expected payload."""

    kind = FetchErrorKind.DECODE
    exit_code = EXIT_DECODE_ERROR
