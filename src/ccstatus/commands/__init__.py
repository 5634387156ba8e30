"""Built-in CLI sub-commands for ccstatus.

* :mod:`~ccstatus.commands.service` -- overall status and components.
* :mod:`~ccstatus.commands.incident` -- recent incidents.
* :mod:`~ccstatus.commands.config` -- inspect the resolved configuration.

Single commands export a plain callback registered on the root app; the
``config`` group exports a :class:`typer.Typer` sub-application.
"""
