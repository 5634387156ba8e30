"""In-memory response caching for ccstatus.

This package provides :class:`TTLCache`, a time-bounded, capacity-bounded
key/value store used by :class:`~ccstatus.services.StatusService` to serve
status API resources cache-aside. Entries live only for the lifetime of the
process.
"""

from ccstatus.cache.cache import TTLCache

__all__ = ["TTLCache"]
