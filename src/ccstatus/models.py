"""Canonical Pydantic models shared across all ccstatus modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Configuration models** -- loaded from JSON config files and environment
variables by :mod:`ccstatus.config`:
    :class:`ApiConfig`, :class:`CacheConfig`, :class:`LogConfig`,
    :class:`LimitsConfig`, :class:`OutputConfig`, and :class:`Settings`.

**Status API payload models** -- decoded from the upstream Statuspage-style
``api/v2`` endpoints by the fetch client and returned by
:class:`~ccstatus.services.StatusService`:
    :class:`Component`, :class:`IncidentComponent`, :class:`IncidentUpdate`,
    :class:`Incident`, :class:`ScheduledMaintenance`, :class:`StatusPage`,
    :class:`StatusIndicator`, :class:`StatusSummary`, and
    :class:`IncidentsResponse`.

Configuration models reject unknown keys so that typos in a config file fail
loudly at startup. Payload models are frozen and ignore unknown keys so that
additive upstream API changes do not break decoding.
"""

from __future__ import annotations

import enum
from datetime import date, datetime
from typing import Optional, Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://status.anthropic.com/api/v2/"


# --- Configuration models ---


class LogLevel(str, enum.Enum):
    """Log levels accepted in configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ApiConfig(BaseModel):
    """Upstream API location and request behaviour.

    ``max_retries`` is the total number of attempts per fetch (the first try
    included), matching the ``CCSTATUS_MAX_RETRIES`` environment variable.
    """

    model_config = ConfigDict(extra="forbid")

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Status API base URL")
    timeout: float = Field(default=10.0, ge=1, le=60, description="Per-attempt timeout in seconds")
    max_retries: int = Field(default=3, ge=1, le=10, description="Max attempts per fetch")
    retry_delay: float = Field(
        default=1.0, ge=0, le=60, description="Linear backoff base delay in seconds"
    )

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("base_url must be a valid http(s) URL")
        return value


class CacheConfig(BaseModel):
    """In-memory response cache settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=True, description="Enable response caching")
    ttl_seconds: float = Field(default=300, gt=0, description="Default cache TTL in seconds")
    max_size: int = Field(default=100, ge=1, description="Maximum number of cached entries")


class LogConfig(BaseModel):
    """Logging level and optional log file."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = LogLevel.INFO
    file: Optional[str] = Field(default=None, description="Also write logs to this file")

    @field_validator("level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.upper()
            if value == "WARN":
                return "WARNING"
        return value


class LimitsConfig(BaseModel):
    """Upper bounds on how much the commands display."""

    model_config = ConfigDict(extra="forbid")

    max_incidents: int = Field(default=50, ge=1)
    max_components: int = Field(default=100, ge=1)
    default_incident_limit: int = Field(default=3, ge=1)


class OutputConfig(BaseModel):
    """Default output format preference."""

    model_config = ConfigDict(extra="forbid")

    format: str = Field(default="auto", pattern="^(auto|json|plain|rich)$")


class Settings(BaseModel):
    """Fully resolved configuration.

    Built by :func:`~ccstatus.config.load_settings` from defaults, config
    files, environment variables, and CLI flags, then passed explicitly to
    :meth:`~ccstatus.services.StatusService.from_settings`.
    """

    model_config = ConfigDict(extra="forbid")

    api: ApiConfig = Field(default_factory=ApiConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Status API payload models ---


class IncidentStatus(str, enum.Enum):
    """Lifecycle state of an incident."""

    INVESTIGATING = "investigating"
    IDENTIFIED = "identified"
    MONITORING = "monitoring"
    RESOLVED = "resolved"
    POSTMORTEM = "postmortem"


class MaintenanceStatus(str, enum.Enum):
    """Lifecycle state of a scheduled maintenance."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    VERIFYING = "verifying"
    COMPLETED = "completed"


class ImpactLevel(str, enum.Enum):
    """Impact of an incident, also used as the overall status indicator."""

    NONE = "none"
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"


class ComponentStatus(str, enum.Enum):
    """Operational state of a component."""

    OPERATIONAL = "operational"
    DEGRADED_PERFORMANCE = "degraded_performance"
    PARTIAL_OUTAGE = "partial_outage"
    MAJOR_OUTAGE = "major_outage"
    UNDER_MAINTENANCE = "under_maintenance"


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class IncidentComponent(_Payload):
    """Lightweight component reference embedded in incidents and updates."""

    id: str
    name: str
    status: ComponentStatus


class Component(IncidentComponent):
    """A service component listed on the status page."""

    created_at: datetime
    updated_at: datetime
    position: int = 0
    description: Optional[str] = None
    showcase: bool = False
    start_date: Optional[date] = None
    group_id: Optional[str] = None
    page_id: str = ""
    group: bool = False
    only_show_if_degraded: bool = False


class IncidentUpdate(_Payload):
    """One progress report posted on an incident or maintenance."""

    id: str
    status: Union[IncidentStatus, MaintenanceStatus]
    body: str = ""
    created_at: datetime
    display_at: Optional[datetime] = None
    affected_components: list[IncidentComponent] = Field(default_factory=list)


class Incident(_Payload):
    """An incident reported on the status page."""

    id: str
    name: str
    status: IncidentStatus
    impact: ImpactLevel
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    monitoring_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    shortlink: str = ""
    page_id: str = ""
    incident_updates: list[IncidentUpdate]
    components: list[IncidentComponent]


class ScheduledMaintenance(Incident):
    """A planned maintenance window."""

    status: MaintenanceStatus  # type: ignore[assignment]
    scheduled_for: Optional[datetime] = None
    scheduled_until: Optional[datetime] = None


class StatusPage(_Payload):
    """Metadata about the status page itself."""

    id: str
    name: str
    url: str
    time_zone: Optional[str] = None
    updated_at: datetime


class StatusIndicator(_Payload):
    """Overall service status: a single indicator plus its description."""

    indicator: ImpactLevel
    description: str


class StatusSummary(_Payload):
    """Response of ``summary.json``: the whole current state of the service."""

    page: StatusPage
    components: list[Component]
    incidents: list[Incident]
    scheduled_maintenances: list[ScheduledMaintenance]
    status: StatusIndicator


class IncidentsResponse(_Payload):
    """Response of ``incidents.json``: incidents wrapped in a page envelope."""

    page: StatusPage
    incidents: list[Incident]
