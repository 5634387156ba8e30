"""Cache-aside access to the status API.

:class:`StatusService` composes a :class:`~ccstatus.client.FetchClient` and a
:class:`~ccstatus.cache.TTLCache`. Each resource is looked up in the cache
under a fixed key; on a miss it is fetched, stored with a resource-specific
TTL, and returned. Failed fetches are never cached, so the next call
retries from scratch.

Two access modes are offered for each resource: bulk (a materialised list
or summary) and lazy (a generator). A lazy sequence resolves its resource
exactly once, on the first ``next()``, and then only walks the resolved
collection, so a consumer that stops early costs nothing beyond that single
fetch.

Concurrent misses on the same key are not coalesced: two callers that both
miss will both fetch, and the last write wins.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterator, Optional

import httpx

from ccstatus.cache import TTLCache
from ccstatus.client import FetchClient
from ccstatus.models import (
    Component,
    Incident,
    IncidentsResponse,
    Settings,
    StatusSummary,
)
from ccstatus.services.base import StatusDataSource

logger = logging.getLogger(__name__)

INCIDENTS_ENDPOINT = "incidents.json"
SUMMARY_ENDPOINT = "summary.json"

INCIDENTS_CACHE_KEY = "incidents"
SERVICE_STATUS_CACHE_KEY = "service_status"

SERVICE_STATUS_TTL_SECONDS = 60.0
"""Status summaries go stale faster than incident history."""


class StatusService(StatusDataSource):
    """Status data source backed by the remote API and an in-memory cache.

    Args:
        client: Fetch client used on cache misses.
        cache: Cache shared for the lifetime of the service.
        status_ttl: TTL in seconds for the service status summary. The
            incident list uses the cache's default TTL.
        use_cache: When ``False`` every call goes to the network and nothing
            is stored.

    Example::

        with StatusService.from_settings(settings) as service:
            for incident in service.get_incidents_stream(limit=3):
                print(incident.name)
    """

    def __init__(
        self,
        client: FetchClient,
        cache: TTLCache[Any],
        status_ttl: float = SERVICE_STATUS_TTL_SECONDS,
        use_cache: bool = True,
    ) -> None:
        self._client = client
        self._cache = cache
        self._status_ttl = status_ttl
        self._use_cache = use_cache

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> StatusService:
        """Build a service, its fetch client, and its cache from *settings*."""
        client = FetchClient.from_config(settings.api, transport=transport)
        cache = TTLCache.from_config(settings.cache, clock=clock)
        return cls(client, cache, use_cache=settings.cache.enabled)

    @property
    def cache(self) -> TTLCache[Any]:
        return self._cache

    def __enter__(self) -> StatusService:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the fetch client's connections."""
        self._client.close()

    # ------------------------------------------------------------------ #
    # Bulk access
    # ------------------------------------------------------------------ #

    def get_incidents(self) -> list[Incident]:
        """Return the incident list, newest first.

        The cache holds a tuple; each call gets its own list, so callers may
        mutate the result without affecting later hits.
        """
        cached = self._cache_get(INCIDENTS_CACHE_KEY)
        if cached is not None:
            return list(cached)

        response = self._client.fetch(INCIDENTS_ENDPOINT, IncidentsResponse)
        incidents = tuple(response.incidents)
        self._cache_set(INCIDENTS_CACHE_KEY, incidents)
        logger.debug("Fetched %d incidents", len(incidents))
        return list(incidents)

    def get_service_status(self) -> StatusSummary:
        cached = self._cache_get(SERVICE_STATUS_CACHE_KEY)
        if cached is not None:
            return cached

        summary = self._client.fetch(SUMMARY_ENDPOINT, StatusSummary)
        self._cache_set(SERVICE_STATUS_CACHE_KEY, summary, ttl=self._status_ttl)
        logger.debug(
            "Fetched status summary: %s (%d components)",
            summary.status.indicator.value,
            len(summary.components),
        )
        return summary

    # ------------------------------------------------------------------ #
    # Lazy access
    # ------------------------------------------------------------------ #

    def get_incidents_stream(self, limit: Optional[int] = None) -> Iterator[Incident]:
        """Yield incidents one at a time.

        The incident list is resolved on the first ``next()`` call, so a
        fetch error is raised there rather than when the generator is
        created. *limit* of ``None`` or ``<= 0`` means no limit.
        """
        incidents = self.get_incidents()
        count = len(incidents) if limit is None or limit <= 0 else min(limit, len(incidents))
        for index in range(count):
            yield incidents[index]

    def get_components_lazy(self) -> Iterator[Component]:
        """Yield the summary's components in page order, resolving the summary on first ``next()``."""
        summary = self.get_service_status()
        for component in summary.components:
            yield component

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _cache_get(self, key: str) -> Any:
        if not self._use_cache:
            return None
        value = self._cache.get(key)
        logger.debug("Cache %s: %s", "hit" if value is not None else "miss", key)
        return value

    def _cache_set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        if self._use_cache:
            self._cache.set(key, value, ttl=ttl)
