"""ccstatus -- report service status and incidents from a Statuspage API.

The package is a small command-line reporter over the two read-only
endpoints of a Statuspage-style ``api/v2`` (``summary.json`` and
``incidents.json``). Its core is a cache-aside data-access layer: a fetch
client with bounded retry and linear backoff, an in-memory TTL cache with
bounded capacity, and a data service that serves each resource in bulk or
lazily.

Typical use::

    ccstatus service            # overall status and components
    ccstatus incident -l 5      # five most recent incidents

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for settings and API payloads.
    config: Settings resolution from files, environment, and flags.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting with Rich support.
    cache: In-memory TTL cache.
    client: HTTP fetch client with retry.
    services: Cache-aside status data service.
"""

__version__ = "0.1.0"
