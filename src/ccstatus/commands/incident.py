"""Incident command -- list the most recent incidents."""

from __future__ import annotations

from typing import Optional

import typer

from ccstatus.commands.common import command_errors, format_timestamp, get_settings, open_service
from ccstatus.models import Incident
from ccstatus.output import OutputFormat, get_output

INCIDENT_HEADERS = [
    "#",
    "Incident",
    "Status",
    "Impact",
    "Created",
    "Resolved",
    "Link",
    "Latest update",
]


def incident_command(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        min=1,
        help="Number of incidents to show (default from config, 3).",
    ),
) -> None:
    """Show the most recent incidents.

    The count is capped at ``limits.max_incidents``. Incidents are pulled
    from :meth:`~ccstatus.services.StatusService.get_incidents_stream`, so
    only the requested number is walked.

    Example::

        ccstatus incident
        ccstatus incident --limit 10
    """
    settings = get_settings(ctx)
    limits = settings.limits
    count = min(limit or limits.default_incident_limit, limits.max_incidents)
    out = get_output()
    out.debug(f"Requesting {count} incident(s) from {settings.api.base_url}")

    with command_errors("Failed to fetch incidents"), open_service(ctx) as service:
        incidents = list(service.get_incidents_stream(count))

    if out.format == OutputFormat.JSON:
        out.print_json(incidents)
        return

    if not incidents:
        out.success("No incidents found. All services are operating normally.")
        return

    out.info(f"Showing the latest {len(incidents)} incident(s):")
    rows = [
        [
            str(index),
            incident.name,
            incident.status.value,
            incident.impact.value,
            format_timestamp(incident.created_at),
            format_timestamp(incident.resolved_at, missing="unresolved"),
            incident.shortlink,
            _latest_update(incident),
        ]
        for index, incident in enumerate(incidents, start=1)
    ]
    out.print_table(INCIDENT_HEADERS, rows, title="Incidents")


def _latest_update(incident: Incident) -> str:
    """Status and time of the newest update, or ``-`` when there is none."""
    if not incident.incident_updates:
        return "-"
    update = incident.incident_updates[0]
    return f"{update.status.value} {format_timestamp(update.display_at or update.created_at)}"
