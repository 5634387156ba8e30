"""Abstract interface for status data sources.

:class:`StatusDataSource` declares every operation the command layer may call,
bulk and lazy alike, so callers never have to probe an implementation for
optional streaming support.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Optional, Sequence

from ccstatus.models import Component, Incident, StatusSummary


class StatusDataSource(ABC):
    """Read-only access to the status page's incidents and service summary."""

    @abstractmethod
    def get_incidents(self) -> list[Incident]:
        """Return the full incident list, most recent first."""
        ...

    @abstractmethod
    def get_service_status(self) -> StatusSummary:
        """Return the current service status summary."""
        ...

    @abstractmethod
    def get_incidents_stream(self, limit: Optional[int] = None) -> Iterator[Incident]:
        """Yield incidents one at a time, at most *limit* of them."""
        ...

    @abstractmethod
    def get_components_lazy(self) -> Iterator[Component]:
        """Yield the summary's components one at a time in page order."""
        ...

    def get_incidents_with_limit(
        self, incidents: Sequence[Incident], limit: int
    ) -> list[Incident]:
        """Return at most *limit* incidents from the front of *incidents*.

        A *limit* of zero or less yields an empty list; a *limit* beyond the
        length of *incidents* yields all of them. No I/O is performed.
        """
        if limit <= 0:
            return []
        return list(incidents[:limit])
