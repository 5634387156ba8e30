"""Status data services.

* :class:`StatusDataSource` -- the abstract interface the commands depend on.
* :class:`StatusService` -- cache-aside implementation over
  :class:`~ccstatus.client.FetchClient` and :class:`~ccstatus.cache.TTLCache`.
"""

from ccstatus.services.base import StatusDataSource
from ccstatus.services.status_service import (
    INCIDENTS_CACHE_KEY,
    SERVICE_STATUS_CACHE_KEY,
    SERVICE_STATUS_TTL_SECONDS,
    StatusService,
)

__all__ = [
    "INCIDENTS_CACHE_KEY",
    "SERVICE_STATUS_CACHE_KEY",
    "SERVICE_STATUS_TTL_SECONDS",
    "StatusDataSource",
    "StatusService",
]
