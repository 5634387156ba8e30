"""Synchronous fetch client with timeout, bounded retry, and payload decoding.

This module provides :class:`FetchClient`, the single place where ccstatus
talks to the network. It wraps :class:`httpx.Client` and layers on:

- **Per-attempt timeout** -- enforced by the httpx transport; a timeout is a
  retryable network failure.
- **Retry with linear backoff** -- transport failures, HTTP 429 and HTTP 5xx
  are retried, waiting ``base_delay * attempt`` seconds between attempts
  (1 s, 2 s, 3 s, ... for a 1 s base). There is no jitter.
- **Error classification** -- terminal failures raise
  :class:`~ccstatus.exceptions.NetworkError`,
  :class:`~ccstatus.exceptions.HTTPError`, or
  :class:`~ccstatus.exceptions.DecodeError`.
- **Decoding** -- success bodies are validated against a Pydantic model.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ccstatus import __version__
from ccstatus.exceptions import DecodeError, HTTPError, NetworkError
from ccstatus.models import ApiConfig

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

RETRYABLE_STATUS = 429


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try a fetch, how long to wait, and when to give up.

    Attributes:
        max_attempts: Total attempts per fetch, the first one included.
        base_delay: Backoff unit in seconds; attempt *n* is followed by a
            wait of ``base_delay * n``.
        timeout: Per-attempt timeout in seconds.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_config(cls, config: ApiConfig) -> RetryPolicy:
        return cls(
            max_attempts=config.max_retries,
            base_delay=config.retry_delay,
            timeout=config.timeout,
        )

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number *attempt* (1-based)."""
        return self.base_delay * attempt


class FetchClient:
    """Blocking client that reads JSON resources from the status API.

    The underlying :class:`httpx.Client` is opened on first use (or on
    entering the context manager) and released by :meth:`close`.

    Args:
        base_url: API root; endpoint paths are appended to it.
        policy: Retry and timeout policy.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        with FetchClient("https://status.anthropic.com/api/v2/") as client:
            summary = client.fetch("summary.json", StatusSummary)
    """

    def __init__(
        self,
        base_url: str,
        policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        self._policy = policy or RetryPolicy()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> FetchClient:
        """Build a client from the ``api`` section of the settings."""
        return cls(config.base_url, RetryPolicy.from_config(config), transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> FetchClient:
        self._ensure_client()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client`. Safe to call twice."""
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def build_url(self, endpoint: str) -> str:
        """Join *endpoint* onto the configured base URL."""
        return self._base_url + endpoint.lstrip("/")

    def fetch(self, endpoint: str, model: type[M]) -> M:
        """GET *endpoint* and decode the body into *model*.

        Args:
            endpoint: Path relative to the base URL, e.g. ``"summary.json"``.
            model: Pydantic model the JSON body must validate against.

        Returns:
            The decoded model instance.

        Raises:
            NetworkError: Transport failure or timeout on the last attempt, or
                a request error such as a redirect loop (not retried).
            HTTPError: Non-success status that is not retryable, or a
                retryable one on the last attempt.
            DecodeError: Success status with a body that is not JSON or does
                not match *model*.
        """
        url = self.build_url(endpoint)
        response, attempts = self._execute_with_retry(url)
        return self._decode(response, url, model, attempts)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._policy.timeout,
                follow_redirects=True,
                headers={
                    "Accept": "application/json",
                    "User-Agent": f"ccstatus/{__version__}",
                },
                transport=self._transport,
            )
        return self._client

    def _execute_with_retry(self, url: str) -> tuple[httpx.Response, int]:
        """Run the attempt loop; return the first success response and its attempt number."""
        client = self._ensure_client()
        max_attempts = self._policy.max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                response = client.get(url)
            except httpx.TransportError as exc:
                if attempt < max_attempts:
                    delay = self._policy.delay_for(attempt)
                    logger.debug(
                        "Network error on %s: %s, retrying in %ss (attempt %d/%d)",
                        url, exc, delay, attempt, max_attempts,
                    )
                    time.sleep(delay)
                    continue
                raise NetworkError(
                    f"Network error after {attempt} attempt(s): {str(exc) or type(exc).__name__}",
                    url=url,
                    attempts=attempt,
                    cause=exc,
                ) from exc
            except httpx.RequestError as exc:
                # Redirect loops and undecodable content encodings are not retried.
                raise NetworkError(
                    f"Request failed: {str(exc) or type(exc).__name__}",
                    url=url,
                    attempts=attempt,
                    cause=exc,
                ) from exc

            if response.is_success:
                logger.debug("GET %s -> %d (attempt %d)", url, response.status_code, attempt)
                return response, attempt

            status = response.status_code
            if (status == RETRYABLE_STATUS or status >= 500) and attempt < max_attempts:
                delay = self._policy.delay_for(attempt)
                logger.debug(
                    "HTTP %d on %s, retrying in %ss (attempt %d/%d)",
                    status, url, delay, attempt, max_attempts,
                )
                time.sleep(delay)
                continue

            raise self._http_error(response, url, attempt)

        # range() is never empty because max_attempts >= 1.
        raise AssertionError("unreachable")  # pragma: no cover

    def _http_error(self, response: httpx.Response, url: str, attempts: int) -> HTTPError:
        """Build an :class:`HTTPError` from a non-success response."""
        status = response.status_code
        reason = response.reason_phrase or ""
        try:
            body: Optional[str] = response.text
        except (httpx.HTTPError, UnicodeDecodeError):
            body = None

        msg = f"HTTP {status}: {reason}" if reason else f"HTTP {status}"
        if body:
            msg = f"{msg} - {body.strip()[:200]}"
        return HTTPError(
            msg,
            url=url,
            attempts=attempts,
            status_code=status,
            status_text=reason,
            body=body,
        )

    def _decode(
        self, response: httpx.Response, url: str, model: type[M], attempts: int
    ) -> M:
        try:
            data = response.json()
        except ValueError as exc:
            raise DecodeError(
                f"Response from {url} is not valid JSON: {exc}",
                url=url,
                attempts=attempts,
                cause=exc,
            ) from exc
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(
                f"Unexpected {model.__name__} payload from {url}: "
                f"{exc.error_count()} validation error(s)",
                url=url,
                attempts=attempts,
                cause=exc,
            ) from exc
