"""HTTP fetch client for ccstatus.

Provides :class:`FetchClient`, a blocking client backed by
:class:`httpx.Client` that reads one JSON resource per call with a
per-attempt timeout and bounded, linearly backed-off retries, and
:class:`RetryPolicy`, the immutable policy it consumes.

Example::

    from ccstatus.client import FetchClient, RetryPolicy
    from ccstatus.models import IncidentsResponse

    with FetchClient(base_url, RetryPolicy(max_attempts=3)) as client:
        data = client.fetch("incidents.json", IncidentsResponse)
"""

from ccstatus.client.fetch_client import FetchClient, RetryPolicy

__all__ = ["FetchClient", "RetryPolicy"]
