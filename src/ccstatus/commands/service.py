"""Service command -- show the overall status and every component.

The summary is fetched once; components are then consumed through
:meth:`~ccstatus.services.StatusService.get_components_lazy` and capped at
``limits.max_components``. Active incidents and scheduled maintenances are
listed after the table.
"""

from __future__ import annotations

from itertools import islice

import typer

from ccstatus.commands.common import command_errors, format_timestamp, get_settings, open_service
from ccstatus.output import OutputFormat, get_output

COMPONENT_HEADERS = ["Component", "Status", "Updated", "Description"]


def service_command(ctx: typer.Context) -> None:
    """Show the current status of every service component.

    Example::

        ccstatus service
        ccstatus --json service
    """
    settings = get_settings(ctx)
    out = get_output()

    with command_errors("Failed to fetch service status"), open_service(ctx) as service:
        summary = service.get_service_status()
        out.debug(f"Fetched {len(summary.components)} component(s) from {settings.api.base_url}")

        if out.format == OutputFormat.JSON:
            out.print_json(summary)
            return

        out.info(f"Status: {summary.status.description}")
        out.info(f"Updated: {format_timestamp(summary.page.updated_at)}")

        components = islice(service.get_components_lazy(), settings.limits.max_components)
        rows = [
            [
                component.name,
                component.status.value,
                format_timestamp(component.updated_at),
                component.description or "",
            ]
            for component in components
        ]
        if rows:
            out.print_table(COMPONENT_HEADERS, rows, title="Service components")

        if summary.incidents:
            out.warning("Active incidents:")
            for incident in summary.incidents:
                out.info(f"  • {incident.name}: {incident.status.value}")

        if summary.scheduled_maintenances:
            out.info("Scheduled maintenance:")
            for maintenance in summary.scheduled_maintenances:
                out.info(f"  • {maintenance.name}: {maintenance.status.value}")
